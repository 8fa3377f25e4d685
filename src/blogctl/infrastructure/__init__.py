"""Infrastructure layer: content files, mapping files, templates.

This layer owns every filesystem read and write. The site context
(:mod:`blogctl.infrastructure.site`) wires domain objects to the paths
configured in ``blogctl.toml``.
"""
