"""Fixtures compartidas para las pruebas de la calculadora."""

import pytest

from keypad_events import key_for_label
from keypad_session import KeypadSession


def press_all(session: KeypadSession, sequence: str) -> list[str]:
    """Teclea "12 + 3 =" en la sesión; los números van dígito a dígito."""
    shown = []
    for chunk in sequence.split():
        key = key_for_label(chunk)
        keys = [key] if key is not None else [key_for_label(ch) for ch in chunk]
        for k in keys:
            assert k is not None, f"unknown label in {chunk!r}"
            shown.append(session.press(k))
    return shown


@pytest.fixture
def session() -> KeypadSession:
    return KeypadSession()


@pytest.fixture
def press(session):
    def _press(sequence: str) -> str:
        press_all(session, sequence)
        return session.display

    return _press
