# lanebattle/commands/__init__.py

def setup_all_commands(bot, registry, config):
    from .battle_cmds import setup_battle_cmds
    from .unit_cmds import setup_unit_cmds

    setup_battle_cmds(bot, registry, config)
    setup_unit_cmds(bot, registry)
