"""Filesystem sub-client for the virtual filesystem API.

This module provides FileSystemClient for the filesystem operation
endpoints (/fs/*).

This is an internal module. Import from `client` instead.
"""

from client._base import BaseClient
from client.models import (
    ExecFileResponse,
    FSActionResponse,
    ListDirResponse,
    ReadFileResponse,
    SnapshotResponse,
    WorkingDirResponse,
)


class FileSystemClient(BaseClient):
    """Client for filesystem operation endpoints (/fs/*).

    Relative paths are resolved by the server against its working directory,
    which is shared by every client of that server.

    Example:
        with VFSClient() as client:
            client.fs.mkdir("docs")
            client.fs.write("docs/readme.txt", "hello")
            client.fs.cd("docs")
            print(client.fs.cat("readme.txt").content)
    """

    _BASE_PATH = "/fs"

    def pwd(self) -> str:
        """Return the server's working directory as an absolute path."""
        data = self._get(f"{self._BASE_PATH}/pwd")
        return WorkingDirResponse(**data).working_dir

    def ls(self, path: str = "") -> ListDirResponse:
        """List a directory's children, sorted by name.

        Args:
            path: Directory to list (empty means the working directory).

        Raises:
            NotFoundError: If the path does not exist.
            BadRequestError: If the path is a file.
        """
        data = self._get(f"{self._BASE_PATH}/ls", params={"path": path})
        return ListDirResponse(**data)

    def cd(self, path: str) -> FSActionResponse:
        """Change the working directory.

        Raises:
            NotFoundError: If the path does not exist.
            BadRequestError: If the path is a file.
        """
        data = self._post(f"{self._BASE_PATH}/cd", json={"path": path})
        return FSActionResponse(**data)

    def mkdir(self, path: str) -> FSActionResponse:
        """Create an empty directory.

        Raises:
            ConflictError: If the name is already taken.
            NotFoundError: If the parent does not exist.
            BadRequestError: If the parent is a file or the name is invalid.
        """
        data = self._post(f"{self._BASE_PATH}/mkdir", json={"path": path})
        return FSActionResponse(**data)

    def touch(self, path: str) -> FSActionResponse:
        """Create an empty file.

        Raises:
            ConflictError: If the name is already taken.
            NotFoundError: If the parent does not exist.
            BadRequestError: If the parent is a file or the name is invalid.
        """
        data = self._post(f"{self._BASE_PATH}/touch", json={"path": path})
        return FSActionResponse(**data)

    def cat(self, path: str) -> ReadFileResponse:
        """Read a file.

        Raises:
            NotFoundError: If the path does not exist.
            BadRequestError: If the path is a directory.
        """
        data = self._get(f"{self._BASE_PATH}/cat", params={"path": path})
        return ReadFileResponse(**data)

    def write(self, path: str, content: str) -> FSActionResponse:
        """Replace a file's content, creating the file if it does not exist.

        Returns:
            Result whose events_logged is 2 when the file was created.

        Raises:
            BadRequestError: If the path is a directory.
            NotFoundError: If the file's parent does not exist.
        """
        data = self._post(
            f"{self._BASE_PATH}/write",
            json={"path": path, "content": content},
        )
        return FSActionResponse(**data)

    def rm(self, path: str) -> FSActionResponse:
        """Remove a file or an empty directory.

        Raises:
            NotFoundError: If the path does not exist.
            ConflictError: If the directory is not empty.
            BadRequestError: If the path is the root.
        """
        data = self._post(f"{self._BASE_PATH}/rm", json={"path": path})
        return FSActionResponse(**data)

    def exec(self, path: str) -> int:
        """Execute a file on the server host and return its exit code.

        Raises:
            ForbiddenError: If the server has execution disabled.
            NotFoundError: If the path does not exist.
            BadRequestError: If the path is a directory.
            ServerError: If the script cannot be launched.
        """
        data = self._post(f"{self._BASE_PATH}/exec", json={"path": path})
        return ExecFileResponse(**data).exit_code

    def snapshot(self) -> SnapshotResponse:
        """Get a nested snapshot of the whole tree."""
        data = self._get(f"{self._BASE_PATH}/snapshot")
        return SnapshotResponse(**data)
