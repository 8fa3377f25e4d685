"""Tests for BaseService."""

from blogctl.infrastructure.site import Site
from blogctl.services.base import BaseService


def test_holds_site(site: Site) -> None:
    svc = BaseService(site)
    assert svc._site is site
