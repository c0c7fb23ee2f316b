from typing import List, Optional

from minishell.ast_tree import Command
from minishell.errors import MissingCommandError, ShellSyntaxError
from minishell.lexer import ShellLexer, ShellToken, ShellTokenType

MAX_ARGS = 128  # one slot is the terminator handed to exec
MAX_PIPE = 16


class ShellParser:
    """
    Clase que representa el parser de la shell.

    Convierte una linea en la lista de etapas del pipeline o lanza
    ShellSyntaxError. La linea se rechaza entera, nunca se devuelve un
    pipeline a medias.
    """

    def __init__(self, lexer: Optional[ShellLexer] = None) -> None:
        self.lexer = lexer or ShellLexer()
        self.tokens: List[ShellToken] = []
        self.pos = 0

    def parse(self, line: str) -> List[Command]:
        line = line.strip()
        if not line:
            raise MissingCommandError("missing command")

        segments = self._split(line)
        pipeline = len(segments) > 1

        commands = []
        for i, segment in enumerate(segments):
            segment = segment.strip()
            if not segment:
                if pipeline:
                    raise MissingCommandError("missing command in pipeline", i + 1)
                raise MissingCommandError("missing command", i + 1)
            last = i == len(segments) - 1
            commands.append(self.parse_stage(segment, last, i + 1))

        if pipeline:
            self._validate_pipeline(commands)
        return commands

    def _split(self, line: str) -> List[str]:
        segments = []
        for segment in self.lexer.split_stages(line):
            if segment == "":
                raise MissingCommandError(
                    "shell: syntax error near unexpected token '|'"
                )
            if len(segments) >= MAX_PIPE:
                raise ShellSyntaxError(
                    f"shell: too many pipeline segments (max {MAX_PIPE})"
                )
            segments.append(segment)
        return segments

    def parse_stage(self, segment: str, last: bool, stage: int = 1) -> Command:
        self.tokens = self.lexer.tokenize(segment)
        self.pos = 0
        cmd = Command([])

        while self.pos < len(self.tokens):
            token = self.consume_any()

            if token.token_type == ShellTokenType.REDIRECT_IN:
                target = self._redirect_target(token, stage)
                if cmd.input_source is not None:
                    raise ShellSyntaxError("cannot redirect input more than once", stage)
                cmd.input_source = target
            elif token.token_type == ShellTokenType.REDIRECT_OUT:
                target = self._redirect_target(token, stage)
                if cmd.output_sink is not None:
                    raise ShellSyntaxError("cannot redirect output more than once", stage)
                cmd.output_sink = target
            elif token.token_type == ShellTokenType.BACKGROUND:
                if not last:
                    raise ShellSyntaxError("'&' can only appear at end of command", stage)
                if self.peek() is not None:
                    raise ShellSyntaxError("syntax error near unexpected token '&'", stage)
                cmd.is_background = True
                break
            else:
                if len(cmd.arguments) >= MAX_ARGS - 1:
                    raise ShellSyntaxError(
                        f"too many arguments (max {MAX_ARGS - 1})", stage
                    )
                cmd.arguments.append(token.lex)

        if not cmd.arguments:
            raise MissingCommandError("missing command", stage)
        return cmd

    def _redirect_target(self, operator: ShellToken, stage: int) -> str:
        # whatever follows is the path, even another operator
        if self.peek() is None:
            raise ShellSyntaxError(
                f"syntax error near unexpected token '{operator.lex}'", stage
            )
        return self.consume_any().lex

    def _validate_pipeline(self, commands: List[Command]) -> None:
        for i, cmd in enumerate(commands):
            if i != 0 and cmd.input_source is not None:
                raise ShellSyntaxError(
                    f"input redirection not allowed for command {i + 1} in pipeline",
                    i + 1,
                )
            if i != len(commands) - 1 and cmd.output_sink is not None:
                raise ShellSyntaxError(
                    f"output redirection not allowed for command {i + 1} in pipeline",
                    i + 1,
                )

    def peek(self) -> Optional[ShellToken]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def consume_any(self) -> ShellToken:
        token = self.tokens[self.pos]
        self.pos += 1
        return token


def parse(line: str) -> List[Command]:
    return ShellParser().parse(line)
