"""
Command Line Interface

`gpio` entry point: global option handling and dispatch to the command
handlers in cli.commands.
"""
