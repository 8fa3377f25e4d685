"""BaseService: foundation for all blogctl services.

Every service receives a :class:`Site` at construction time and reads
paths, settings and mapping files through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blogctl.infrastructure.site import Site


class BaseService:
    """Base for service-layer classes.

    Usage::

        class IdService(BaseService):
            def generate(self) -> ServiceResult:
                scan = self._site.collect_posts()
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site
