import os
import signal
import sys
from typing import Dict, List, Optional

from minishell.ast_tree import Command, ControlSignal
from minishell.errors import RedirectionError
from minishell.redirect import apply_redirections

EXIT_BUILTIN = "exit"
CD_BUILTIN = "cd"

EXIT_REDIRECT_FAILED = 1
EXIT_COMMAND_NOT_FOUND = 127


class CommandExecutor:
    """
    Clase que representa el ejecutor de comandos.

    Los builtins corren en el propio proceso de la shell; todo lo demas se
    lanza con fork/exec, una etapa por proceso, unidas con pipes.
    """
    def __init__(self, env: Optional[Dict[str, str]] = None) -> None:
        self.env = os.environ.copy() if env is None else env
        self.last_background_pid: Optional[int] = None

    def execute(self, commands: List[Command]) -> ControlSignal:
        if not commands:
            return ControlSignal.CONTINUE

        if len(commands) == 1:
            cmd = commands[0]
            if cmd.name == EXIT_BUILTIN:
                return ControlSignal.TERMINATE
            if cmd.name == CD_BUILTIN:
                self._builtin_cd(cmd.arguments[1:])
                return ControlSignal.CONTINUE

        pids = self.launch(commands)

        if commands[-1].is_background:
            if pids:
                self.last_background_pid = pids[-1]
                print(f"[{pids[-1]}]", flush=True)
        else:
            self.wait_all(pids)
        return ControlSignal.CONTINUE

    def launch(self, commands: List[Command]) -> List[int]:
        """
        Lanza todas las etapas y devuelve sus pids en orden.

        Si falla un pipe o un fork se deja de lanzar; las etapas que ya
        arrancaron siguen hasta terminar.
        """
        pids: List[int] = []
        prev_fd: Optional[int] = None
        last = len(commands) - 1

        for i, cmd in enumerate(commands):
            read_fd = write_fd = None
            if i < last:
                try:
                    read_fd, write_fd = os.pipe()
                except OSError as e:
                    print(f"shell: pipe: {e.strerror}", file=sys.stderr, flush=True)
                    break

            sys.stdout.flush()
            sys.stderr.flush()
            try:
                pid = os.fork()
            except OSError as e:
                print(f"shell: fork: {e.strerror}", file=sys.stderr, flush=True)
                if write_fd is not None:
                    os.close(read_fd)
                    os.close(write_fd)
                break

            if pid == 0:
                self._run_child(cmd, prev_fd, read_fd, write_fd)

            pids.append(pid)
            if prev_fd is not None:
                os.close(prev_fd)
            if write_fd is not None:
                os.close(write_fd)
            prev_fd = read_fd

        if prev_fd is not None:
            os.close(prev_fd)
        return pids

    def _run_child(
        self,
        cmd: Command,
        prev_fd: Optional[int],
        read_fd: Optional[int],
        write_fd: Optional[int],
    ) -> None:
        # Never returns: every path ends in exec or os._exit.
        status = EXIT_COMMAND_NOT_FOUND
        try:
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)

            if prev_fd is not None:
                os.dup2(prev_fd, 0)
                os.close(prev_fd)
            if write_fd is not None:
                os.dup2(write_fd, 1)
                os.close(read_fd)
                os.close(write_fd)

            try:
                apply_redirections(cmd)
            except RedirectionError as e:
                print(e, file=sys.stderr, flush=True)
                status = EXIT_REDIRECT_FAILED
                return

            try:
                os.execvpe(cmd.name, cmd.arguments, self.env)
            except (OSError, ValueError):
                print(f"{cmd.name}: Command not found", file=sys.stderr, flush=True)
        except OSError as e:
            print(f"shell: {e.strerror}", file=sys.stderr, flush=True)
            status = EXIT_REDIRECT_FAILED
        finally:
            os._exit(status)

    def wait_all(self, pids: List[int]) -> None:
        for pid in pids:
            try:
                os.waitpid(pid, 0)
            except ChildProcessError:
                continue

    def _builtin_cd(self, args: List[str]) -> None:
        if args:
            new_dir = args[0]
        else:
            new_dir = self.env.get("HOME") or "."

        try:
            os.chdir(new_dir)
        except OSError as e:
            print(f"cd: {new_dir}: {e.strerror}", file=sys.stderr, flush=True)
        except ValueError as e:
            print(f"cd: {new_dir}: {e}", file=sys.stderr, flush=True)
