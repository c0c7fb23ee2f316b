import os

from minishell.ast_tree import Command
from minishell.errors import RedirectionError

OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
OUTPUT_MODE = 0o644


def apply_redirections(cmd: Command) -> None:
    """
    Aplica '<' y '>' de una etapa sobre los fd 0 y 1 del proceso actual.

    Solo debe llamarse dentro del hijo, antes del exec.
    """
    if cmd.input_source is not None:
        try:
            fd = os.open(cmd.input_source, os.O_RDONLY)
        except (OSError, ValueError):
            raise RedirectionError(f"{cmd.input_source} : File not found")
        _replace_fd(fd, 0, "input")

    if cmd.output_sink is not None:
        try:
            fd = os.open(cmd.output_sink, OUTPUT_FLAGS, OUTPUT_MODE)
        except (OSError, ValueError):
            raise RedirectionError(f"{cmd.output_sink}: Cannot create file")
        _replace_fd(fd, 1, "output")


def _replace_fd(fd: int, target: int, direction: str) -> None:
    try:
        os.dup2(fd, target)
    except OSError as e:
        raise RedirectionError(
            f"error duplicating file descriptor for {direction}: {e.strerror}"
        )
    finally:
        if fd != target:
            os.close(fd)
