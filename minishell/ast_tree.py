from enum import Enum, auto
from typing import List, Optional


class Command:
    """
    Una etapa de un pipeline: argumentos, redirecciones y marca de background.
    """
    def __init__(
        self,
        arguments: List[str],
        input_source: Optional[str] = None,
        output_sink: Optional[str] = None,
        is_background: bool = False,
    ) -> None:
        self.arguments = arguments
        self.input_source = input_source
        self.output_sink = output_sink
        self.is_background = is_background

    @property
    def name(self) -> str:
        return self.arguments[0] if self.arguments else ""

    def __eq__(self, other) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return (
            self.arguments == other.arguments
            and self.input_source == other.input_source
            and self.output_sink == other.output_sink
            and self.is_background == other.is_background
        )

    def __repr__(self) -> str:
        return (
            f"Command({self.arguments}, in={self.input_source}, "
            f"out={self.output_sink}, bg={self.is_background})"
        )


class ControlSignal(Enum):
    """
    Lo que el ejecutor le devuelve al bucle de lectura.
    """
    CONTINUE = auto()
    TERMINATE = auto()
