"""ParticleGen - Compose parametric shapes into particle placement commands.

ParticleGen builds point clouds from parametric 2-D shapes (circles, lines,
regular polygons), merges nearly coincident points across shapes and exports
the result as a Minecraft function file. The shape composition itself is
embedded in the exported file as a compact import key, so the file can be
loaded back and edited later.

Example:
    $ particlegen generate circle:count=24,radius=3 -o ring.mcfunction

This will create ring.mcfunction with 24 particle commands on a circle of
radius 3 and an import key line describing the composition.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
