"""Configuración compartida de pytest.

Shared pytest configuration.
"""

from __future__ import annotations

from pathlib import Path
import logging
from logging.handlers import RotatingFileHandler
import socket
import sys
from typing import Any

import pytest
import structlog

REPO_ROOT = Path(__file__).resolve().parent
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Restaura structlog y quita overrides de entorno entre tests.

    English:
        Restores structlog defaults and clears environment overrides between tests.
    """
    monkeypatch.delenv("BENFORD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("BENFORD_WORKERS", raising=False)
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def block_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Impide conexiones de red reales en tests.

    English:
        Prevents real network connections in tests.
    """

    def guarded_connect(*args: Any, **kwargs: Any) -> None:
        raise RuntimeError("Network access is disabled during tests.")

    monkeypatch.setattr(socket.socket, "connect", guarded_connect, raising=True)
    monkeypatch.setattr(socket, "create_connection", guarded_connect, raising=True)
