"""
Binary STL reader/writer.

Layout: 80-byte header, little-endian uint32 triangle count, then one
50-byte record per triangle (normal, three vertices as float32 triples and
a uint16 attribute word). Normals are written exactly as stored in the
mesh. Output goes to a temporary file next to the destination and is
renamed into place only once fully written.
"""
import logging
import os
import struct
import tempfile
from pathlib import Path
from typing import Union

import numpy as np

from skyline.mesh import Mesh

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
COUNT_SIZE = 4
DEFAULT_HEADER = b"skyline binary STL"

STL_RECORD = np.dtype([
    ("normal", "<f4", (3,)),
    ("v1", "<f4", (3,)),
    ("v2", "<f4", (3,)),
    ("v3", "<f4", (3,)),
    ("attr", "<u2"),
])


def encode_stl(mesh: Mesh, header: bytes = DEFAULT_HEADER) -> bytes:
    """Serialize *mesh* to binary STL bytes."""
    records = np.zeros(len(mesh), dtype=STL_RECORD)
    records["normal"] = mesh.normals
    records["v1"] = mesh.vertices[:, 0]
    records["v2"] = mesh.vertices[:, 1]
    records["v3"] = mesh.vertices[:, 2]
    return (
        header[:HEADER_SIZE].ljust(HEADER_SIZE, b"\0")
        + struct.pack("<I", len(mesh))
        + records.tobytes()
    )


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_stl(
    mesh: Mesh,
    destination: Union[str, Path],
    header: bytes = DEFAULT_HEADER,
) -> Path:
    """Atomically write *mesh* to *destination*; returns the final path."""
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    payload = encode_stl(mesh, header)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp creates 0600; give the result the mode a plain open() would
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, destination)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Wrote %d triangles to %s", len(mesh), destination)
    return destination


def read_stl(path: Union[str, Path]) -> Mesh:
    """Read a binary STL file written by :func:`write_stl` or any conforming tool."""
    data = Path(path).read_bytes()
    if len(data) < HEADER_SIZE + COUNT_SIZE:
        raise ValueError(f"{path}: too short for a binary STL ({len(data)} bytes)")
    (count,) = struct.unpack_from("<I", data, HEADER_SIZE)
    expected = HEADER_SIZE + COUNT_SIZE + count * STL_RECORD.itemsize
    if len(data) != expected:
        raise ValueError(
            f"{path}: size {len(data)} does not match {count} triangles ({expected} bytes)"
        )
    if count == 0:
        return Mesh.empty()
    records = np.frombuffer(data, dtype=STL_RECORD, count=count, offset=HEADER_SIZE + COUNT_SIZE)
    vertices = np.stack([records["v1"], records["v2"], records["v3"]], axis=1)
    return Mesh(records["normal"], vertices)
