"""Filesystem operation endpoints.

Exposes the operation layer over HTTP: navigation (pwd, cd, ls), file and
directory creation, reads, writes, removal, execution and a tree snapshot.
Filesystem errors propagate to the handlers registered in api.exceptions.
"""

from fastapi import APIRouter

from api.dependencies import ExecutorDep, FileSystemDep, SettingsDep
from api.exceptions import ExecutionDisabledError
from api.models import (
    ExecFileResponse,
    FSActionResponse,
    ListDirResponse,
    NodeEntry,
    PathRequest,
    ReadFileResponse,
    SnapshotResponse,
    WorkingDirResponse,
    WriteFileRequest,
)
from vfs.filesystem import VirtualFileSystem

router = APIRouter(
    prefix="/fs",
    tags=["filesystem"],
)


def _action_response(
    fs: VirtualFileSystem, path: str, events_before: int, message: str
) -> FSActionResponse:
    return FSActionResponse(
        path=path,
        working_dir=fs.working_dir,
        events_logged=len(fs.event_log) - events_before,
        message=message,
    )


@router.get("/pwd", response_model=WorkingDirResponse)
async def print_working_dir(fs: FileSystemDep):
    """Get the working directory."""
    return WorkingDirResponse(working_dir=fs.working_dir)


@router.get("/ls", response_model=ListDirResponse)
async def list_dir(fs: FileSystemDep, path: str = ""):
    """List a directory's children, sorted by name.

    Args:
        path: Directory to list (empty means the working directory).

    Returns:
        ListDirResponse: The directory's absolute path and entries.
    """
    nodes = fs.list_dir(path)
    directory = fs.tree.path_of(fs.resolve(path))
    entries = [NodeEntry.from_node(node) for node in nodes]
    return ListDirResponse(path=directory, entries=entries, count=len(entries))


@router.post("/cd", response_model=FSActionResponse)
async def change_dir(request: PathRequest, fs: FileSystemDep):
    """Change the working directory. No event is logged."""
    fs.change_dir(request.path)
    return _action_response(
        fs, fs.working_dir, len(fs.event_log), f"Changed directory to {fs.working_dir}"
    )


@router.post("/mkdir", response_model=FSActionResponse)
async def make_dir(request: PathRequest, fs: FileSystemDep):
    """Create an empty directory."""
    before = len(fs.event_log)
    absolute = fs.absolute_path(request.path)
    fs.mkdir(request.path)
    return _action_response(fs, absolute, before, f"Created directory {absolute}")


@router.post("/touch", response_model=FSActionResponse)
async def create_file(request: PathRequest, fs: FileSystemDep):
    """Create an empty file."""
    before = len(fs.event_log)
    absolute = fs.absolute_path(request.path)
    fs.create_file(request.path)
    return _action_response(fs, absolute, before, f"Created file {absolute}")


@router.get("/cat", response_model=ReadFileResponse)
async def read_file(fs: FileSystemDep, path: str):
    """Read a file's content."""
    content = fs.read_file(path)
    return ReadFileResponse(path=fs.absolute_path(path), content=content)


@router.post("/write", response_model=FSActionResponse)
async def write_file(request: WriteFileRequest, fs: FileSystemDep):
    """Write a file, creating it first if it does not exist.

    A write to a new path logs two events (CREATE_FILE then WRITE_FILE),
    which is reflected in events_logged.
    """
    before = len(fs.event_log)
    absolute = fs.absolute_path(request.path)
    fs.write_file(request.path, request.content)
    return _action_response(
        fs, absolute, before, f"Wrote {len(request.content)} characters to {absolute}"
    )


@router.post("/rm", response_model=FSActionResponse)
async def remove(request: PathRequest, fs: FileSystemDep):
    """Remove a file or an empty directory."""
    before = len(fs.event_log)
    target = fs.tree.path_of(fs.resolve(request.path))
    fs.remove(request.path)
    return _action_response(fs, target, before, f"Removed {target}")


@router.post("/exec", response_model=ExecFileResponse)
async def exec_file(
    request: PathRequest,
    fs: FileSystemDep,
    settings: SettingsDep,
    executor: ExecutorDep,
):
    """Execute a file's content as a host script.

    Only available when VFS_ALLOW_EXEC is enabled. Blocks until the script
    exits; the script's output goes to the server's standard streams.
    """
    if not settings.allow_exec:
        raise ExecutionDisabledError()

    exit_code = fs.exec_file(request.path, executor)
    return ExecFileResponse(path=fs.absolute_path(request.path), exit_code=exit_code)


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot(fs: FileSystemDep):
    """Get a nested snapshot of the whole tree."""
    return SnapshotResponse(**fs.get_snapshot())
