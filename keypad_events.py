"""Eventos lógicos del teclado y traducción desde etiquetas de botón.

La interfaz (tkinter, web, etc.) traduce cada activación física a un
único ``Key`` con ``key_for_label`` y se lo entrega a la sesión.
"""

from enum import Enum
from typing import NamedTuple

from formula_evaluator import Operator


class KeyKind(Enum):
    DIGIT = "digit"
    DECIMAL = "decimal"
    CLEAR = "clear"
    TOGGLE_SIGN = "toggle_sign"
    PERCENT = "percent"
    OPERATOR = "operator"
    EQUALS = "equals"


class Key(NamedTuple):
    kind: KeyKind
    value: object = None

    @classmethod
    def digit(cls, d: str) -> "Key":
        if len(d) != 1 or d not in "0123456789":
            raise ValueError(f"Dígito inválido: {d!r}")
        return cls(KeyKind.DIGIT, d)

    @classmethod
    def operator(cls, op: Operator) -> "Key":
        return cls(KeyKind.OPERATOR, op)


DECIMAL = Key(KeyKind.DECIMAL)
CLEAR = Key(KeyKind.CLEAR)
TOGGLE_SIGN = Key(KeyKind.TOGGLE_SIGN)
PERCENT = Key(KeyKind.PERCENT)
EQUALS = Key(KeyKind.EQUALS)


_LABELS = {
    ".": DECIMAL,
    ",": DECIMAL,
    "C": CLEAR,
    "AC": CLEAR,
    "Escape": CLEAR,
    "±": TOGGLE_SIGN,
    "%": PERCENT,
    "=": EQUALS,
    "Return": EQUALS,
    "KP_Enter": EQUALS,
    "+": Key.operator(Operator.ADD),
    "−": Key.operator(Operator.SUBTRACT),
    "-": Key.operator(Operator.SUBTRACT),
    "×": Key.operator(Operator.MULTIPLY),
    "*": Key.operator(Operator.MULTIPLY),
    "÷": Key.operator(Operator.DIVIDE),
    "/": Key.operator(Operator.DIVIDE),
}

# Nombres accesibles, para botones cuyo texto es un icono
_ARIA_LABELS = {
    "Add": Key.operator(Operator.ADD),
    "Subtract": Key.operator(Operator.SUBTRACT),
    "Multiply": Key.operator(Operator.MULTIPLY),
    "Divide": Key.operator(Operator.DIVIDE),
    "Equals": EQUALS,
    "Decimal point": DECIMAL,
    "Clear": CLEAR,
    "Toggle sign": TOGGLE_SIGN,
    "Percent": PERCENT,
}


def key_for_label(text: str, aria_label: str = "") -> Key | None:
    """Traduce la etiqueta de un botón o tecla a un ``Key``.

    Devuelve ``None`` si la etiqueta no corresponde a ninguna tecla.
    """
    text = (text or "").strip()
    if len(text) == 1 and text in "0123456789":
        return Key.digit(text)
    if text in _LABELS:
        return _LABELS[text]
    return _ARIA_LABELS.get((aria_label or "").strip())
