"""File helpers used by packaging and indexing commands."""

from __future__ import annotations

import hashlib
import os
import shutil
from pathlib import Path
from typing import BinaryIO

_CHUNK = 64 * 1024


def copy_operator_tree(source: str | os.PathLike[str], base: str | os.PathLike[str]) -> Path:
    """Copy an operator file or directory into ``base``.

    The copy keeps the source's own name, so ``zk`` copied into ``/opt``
    lands at ``/opt/zk``. Returns the path of the copy.
    """
    src = Path(source)
    base_dir = Path(base)
    base_dir.mkdir(parents=True, exist_ok=True)
    target = base_dir / src.name
    if src.is_dir():
        shutil.copytree(src, target, dirs_exist_ok=True)
    else:
        shutil.copyfile(src, target)
    return target


def full_path_to_target(destination: str, name: str, overwrite: bool) -> str:
    """Absolute path of ``name`` inside the ``destination`` directory.

    The first ``~`` in ``destination`` is replaced by the user's home.
    Raises :class:`NotADirectoryError` if the destination is not a directory
    and :class:`FileExistsError` if the target exists and ``overwrite`` is
    false.
    """
    if "~" in destination:
        destination = destination.replace("~", str(Path.home()), 1)
    destination = os.path.abspath(destination)
    if not os.path.isdir(destination):
        raise NotADirectoryError(f'destination "{destination}" is not a proper directory')
    target = os.path.join(destination, name)
    if os.path.exists(target) and not overwrite:
        raise FileExistsError(f'target file "{target}" already exists')
    return target


def sha256_sum(stream: BinaryIO) -> str:
    """Hex SHA-256 digest of everything remaining in a binary stream."""
    digest = hashlib.sha256()
    for chunk in iter(lambda: stream.read(_CHUNK), b""):
        digest.update(chunk)
    return digest.hexdigest()