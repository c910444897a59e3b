from calendar_manager.cli import cli

cli(obj={})
