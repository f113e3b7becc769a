from __future__ import annotations

import pytest


def test_builtin_entities_registered(conn):
    from services.file_service import FileService
    from services.registry import available_entities, get_service
    from services.reregistration_service import ReRegistrationService

    names = available_entities().keys()
    assert "arquivo" in names
    assert "recadastramento" in names

    assert isinstance(get_service("arquivo", conn), FileService)
    assert isinstance(get_service("recadastramento", conn), ReRegistrationService)


def test_unknown_entity_raises(conn):
    from services.registry import get_service

    with pytest.raises(KeyError):
        get_service("does_not_exist", conn)
