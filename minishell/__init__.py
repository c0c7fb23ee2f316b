from minishell.ast_tree import Command, ControlSignal
from minishell.errors import MissingCommandError, RedirectionError, ShellSyntaxError
from minishell.executer import CommandExecutor
from minishell.parser import ShellParser, parse
from minishell.shell import Shell, main

__all__ = [
    "Command",
    "CommandExecutor",
    "ControlSignal",
    "MissingCommandError",
    "RedirectionError",
    "Shell",
    "ShellParser",
    "ShellSyntaxError",
    "main",
    "parse",
]
