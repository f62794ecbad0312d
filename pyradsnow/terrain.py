"""
Terrain preprocessing on digital elevation models.

Surface normals and cast shadows for a DEM held in memory as a 2-D
array. Columns run towards east (x) and rows towards south (y), the
same frame as the sun vector, so a north-up raster can be used as is.

The last row and column of every output are left at zero because the
four-corner stencil and the shadow scan only visit interior cells.

References:
- Corripio (2003) Int. J. Geographical Information Science,
  doi:10.1080/13658810210157796
"""

import numpy as np


def calc_normal_vectors(dem, dx):
    """
    Unit vectors normal to the surface of each grid cell.

    Parameters
    ----------
    dem : np.ndarray
        Elevation [m], shape (rows, cols)
    dx : float
        Grid resolution [m]

    Returns
    -------
    np.ndarray
        Shape (rows, cols, 3): x (east), y (south), z (up) components
    """
    z = np.asarray(dem, dtype=float)
    rows, cols = z.shape
    normals = np.zeros((rows, cols, 3))

    z00 = z[:-1, :-1]
    z10 = z[:-1, 1:]   # next column
    z01 = z[1:, :-1]   # next row
    z11 = z[1:, 1:]

    n1 = dx * (z00 - z10 + z01 - z11)
    n2 = dx * (z00 + z10 - z01 - z11)
    n3 = np.full_like(n1, 2.0 * dx * dx)

    norm = np.sqrt(n1 ** 2 + n2 ** 2 + n3 ** 2)
    normals[:-1, :-1, 0] = n1 / norm
    normals[:-1, :-1, 1] = n2 / norm
    normals[:-1, :-1, 2] = n3 / norm

    return normals


def calc_incidence_cosine(normals, sun_vector):
    """
    Cosine of the angle between each surface normal and the sun.

    Parameters
    ----------
    normals : np.ndarray
        Shape (rows, cols, 3), from calc_normal_vectors
    sun_vector : array-like
        Unit vector towards the sun

    Returns
    -------
    np.ndarray
        Shape (rows, cols), clipped at 0 for self-shaded slopes
    """
    cos_i = np.asarray(normals) @ np.asarray(sun_vector, dtype=float)
    return np.clip(cos_i, 0.0, None)


def calc_shadow_map(dem, dx, sun_vector):
    """
    Cast shadows for one sun position.

    Each interior cell is traced towards the sun one grid step at a
    time along the dominant horizontal axis. The cell is shaded when
    the terrain along the ray rises above the ray. Tracing stops when
    the ray leaves the grid or climbs above the highest cell.

    Parameters
    ----------
    dem : np.ndarray
        Elevation [m], shape (rows, cols)
    dx : float
        Grid resolution [m]
    sun_vector : array-like
        Unit vector towards the sun (x east, y south, z up)

    Returns
    -------
    np.ndarray
        1.0 for illuminated cells, 0.0 for shaded cells and for the
        last row and column; NaN where the DEM has no data
    """
    z = np.asarray(dem, dtype=float)
    sx, sy, sz = np.asarray(sun_vector, dtype=float)
    rows, cols = z.shape
    shadow_index = np.zeros((rows, cols))

    if sz <= 0:
        return shadow_index

    rr, cc = np.meshgrid(np.arange(rows - 1), np.arange(cols - 1), indexing='ij')
    z0 = z[:-1, :-1]
    shaded = np.zeros(z0.shape, dtype=bool)

    horizontal = np.hypot(sx, sy)
    if horizontal > 1e-12:
        scale = max(abs(sx), abs(sy))
        step_c = sx / scale
        step_r = sy / scale
        rise = dx * np.hypot(step_c, step_r) * sz / horizontal

        z_top = np.nanmax(z)
        active = np.isfinite(z0)
        k = 0
        while active.any():
            k += 1
            r = np.rint(rr + k * step_r).astype(int)
            c = np.rint(cc + k * step_c).astype(int)
            ray = z0 + k * rise

            active &= (r >= 0) & (r < rows) & (c >= 0) & (c < cols) & (ray <= z_top)
            if not active.any():
                break

            terrain = z[np.clip(r, 0, rows - 1), np.clip(c, 0, cols - 1)]
            blocked = active & (terrain > ray)
            shaded |= blocked
            active &= ~blocked

    interior = np.where(shaded, 0.0, 1.0)
    interior[~np.isfinite(z0)] = np.nan
    shadow_index[:-1, :-1] = interior

    return shadow_index
