class ShellSyntaxError(SyntaxError):
    """
    Error de sintaxis detectado antes de crear ningun proceso.
    """

    def __init__(self, message: str, stage: int = 0) -> None:
        super().__init__(message)
        self.message = message
        # 1-based, 0 when the error is not tied to a stage
        self.stage = stage

    def __str__(self) -> str:
        return self.message


class MissingCommandError(ShellSyntaxError):
    """
    Linea o etapa sin comando: vacia, '|' sobrante o solo redirecciones.
    """


class RedirectionError(Exception):
    """
    Fallo al preparar '<' o '>' dentro del proceso hijo.
    """
