"""Run a virtual file's content as a host process."""

import logging
import os
import re
import stat
import subprocess
import tempfile

from vfs.errors import ExecutionError

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class ScriptExecutor:
    """Materialises file content as an executable script and runs it.

    The script is written to a private temporary file with a shebang line,
    made executable, and run in the foreground. The child inherits the
    current environment and standard streams. The call blocks until the
    process exits.

    Args:
        shell: Interpreter placed on the shebang line.
    """

    def __init__(self, shell: str = DEFAULT_SHELL) -> None:
        self.shell = shell

    def build_script(self, content: str) -> str:
        return f"#!{self.shell}\n{content}\n"

    def run(self, name: str, content: str) -> int:
        """Execute content and return the process exit code.

        Args:
            name: Name of the virtual file, used for the temporary file name.
            content: Script body.

        Returns:
            The exit code (negative if the process was killed by a signal).

        Raises:
            ExecutionError: If the script cannot be written or launched.
        """
        safe_name = _UNSAFE_NAME_CHARS.sub("_", name) or "script"

        with tempfile.TemporaryDirectory(prefix="vfs-exec-") as workdir:
            script_path = os.path.join(workdir, safe_name)
            try:
                with open(script_path, "w", encoding="utf-8") as handle:
                    handle.write(self.build_script(content))
                os.chmod(script_path, stat.S_IRWXU)
            except OSError as e:
                raise ExecutionError(f"failed to materialise {name}: {e}") from e

            logger.info(f"Executing {name} with {self.shell}")
            try:
                completed = subprocess.run([script_path], env=os.environ.copy(), check=False)
            except OSError as e:
                raise ExecutionError(f"failed to execute {name}: {e}") from e

        logger.info(f"{name} exited with code {completed.returncode}")
        return completed.returncode
