import io
import os
import sys
from typing import Optional, TextIO

from minishell.ast_tree import ControlSignal
from minishell.errors import ShellSyntaxError
from minishell.executer import CommandExecutor
from minishell.parser import ShellParser

PROMPT = "$ "


class Shell:
    """
    Bucle principal: lee una linea, la parsea y la ejecuta.
    """
    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        executor: Optional[CommandExecutor] = None,
    ) -> None:
        if stdin is None:
            # undecodable bytes reach exec and open unchanged through fsencode
            stdin = io.TextIOWrapper(
                sys.stdin.buffer,
                encoding=sys.stdin.encoding,
                errors="surrogateescape",
            )
        self.stdin = stdin
        self.executor = executor or CommandExecutor()
        self.parser = ShellParser()
        self.interactive = self.stdin.isatty()

    @property
    def last_background_pid(self) -> Optional[int]:
        return self.executor.last_background_pid

    def print_prompt(self) -> None:
        if self.interactive:
            print(PROMPT, end="", flush=True)

    def read_line(self) -> Optional[str]:
        line = self.stdin.readline()
        if not line:
            return None
        if line.endswith("\n"):
            line = line[:-1]
        return line

    def process_line(self, line: str) -> Optional[ControlSignal]:
        """None means the line was skipped (blank or syntax error)."""
        line = line.strip()
        if not line:
            return None

        try:
            commands = self.parser.parse(line)
        except ShellSyntaxError as e:
            print(e, file=sys.stderr, flush=True)
            return None

        return self.executor.execute(commands)

    def reap_children(self) -> None:
        while True:
            try:
                pid, _ = os.waitpid(-1, os.WNOHANG)
            except ChildProcessError:
                break
            if pid == 0:
                break

    def run(self) -> int:
        while True:
            self.print_prompt()
            try:
                line = self.read_line()
            except KeyboardInterrupt:
                print()
                continue

            if line is None:
                if self.interactive:
                    print()
                break

            result = self.process_line(line)
            if result is None:
                continue
            if result == ControlSignal.TERMINATE:
                break
            self.reap_children()
        return 0


def main() -> int:
    return Shell().run()


if __name__ == "__main__":
    sys.exit(main())
