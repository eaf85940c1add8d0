"""
Cloud Vertex Packing

Converts sampled clouds into the flat vertex layout handed to the
renderer: a float32 position followed by a float32 weight, 16 bytes per
vertex, no padding. The renderer replaces its whole buffer on every
update.
"""

import numpy as np

CLOUD_VERTEX_DTYPE = np.dtype([
    ('position', np.float32, (3,)),
    ('weight', np.float32),
])


def pack_cloud_vertices(samples):
    """
    Pack CloudSamples into a structured vertex array.

    Args:
        samples: CloudSamples (or anything with positions/weights arrays)

    Returns:
        np.ndarray: 1-D array of CLOUD_VERTEX_DTYPE
    """
    vertices = np.empty(len(samples.weights), dtype=CLOUD_VERTEX_DTYPE)
    vertices['position'] = samples.positions
    vertices['weight'] = samples.weights
    return vertices


def vertex_buffer_bytes(vertices):
    """Raw bytes for a GPU upload."""
    return np.ascontiguousarray(vertices, dtype=CLOUD_VERTEX_DTYPE).tobytes()
