"""
Spatial algorithms behind coverage path generation.

1. **geometry**: point-in-polygon, bounding box, vertex centroid and the
   disc/polygon overlap test used to keep lattice points near the boundary

2. **projection**: per-polygon UTM plane and the flat-earth cartesian frame
   anchored at the first waypoint

3. **lattice.generate_hex_lattice**: filtered hexagonal sampling of a polygon

4. **path_optimizer.optimize_path**: serpentine ordering of lattice rows

Callers should go through dronemission.covergen.coverage.compute_coverage,
which validates the ring and applies the vertex fallback.
"""

__all__ = []
