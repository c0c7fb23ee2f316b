from enum import Enum, auto
from typing import List, NamedTuple

PIPE = "|"


class ShellTokenType(Enum):
    WORD = auto()
    REDIRECT_IN = auto()  # <
    REDIRECT_OUT = auto()  # >
    BACKGROUND = auto()  # &


OPERATORS = {
    "<": ShellTokenType.REDIRECT_IN,
    ">": ShellTokenType.REDIRECT_OUT,
    "&": ShellTokenType.BACKGROUND,
}


class ShellToken(NamedTuple):
    lex: str
    token_type: ShellTokenType


class ShellLexer:
    """
    Clase que representa el lexer de la shell.

    No hay comillas ni escapes: los operadores solo se reconocen como
    tokens completos separados por espacios.
    """

    def split_stages(self, line: str) -> List[str]:
        # empty segments are kept, the parser reports them
        return line.split(PIPE)

    def tokenize(self, segment: str) -> List[ShellToken]:
        tokens = []
        for lex in segment.split():
            tokens.append(ShellToken(lex, OPERATORS.get(lex, ShellTokenType.WORD)))
        return tokens
