"""Tokenización y reducción izquierda-a-derecha de la expresión en pantalla.

La expresión la construye la sesión de teclado, siempre con operandos
y operadores separados por espacios (``"3 + 4 × 2"``). Solo por eso es
seguro partirla por espacios: no debe usarse con entrada arbitraria.
"""

import contextlib
import logging
import math
import re
from decimal import Decimal
from enum import Enum

from calculator_errors import (
    DivideByZeroError,
    InvalidOperandError,
    UnknownOperatorError,
)

log = logging.getLogger("calculator.evaluator")

ERROR_TEXT = "Error"
EXACT_INTEGER_MAX = 2 ** 53
POSITIONAL_MIN = Decimal("1e-6")
POSITIONAL_MAX = Decimal("1e21")


class Operator(Enum):
    """Operador binario con su glifo de pantalla y su token canónico."""

    ADD = ("+", "+")
    SUBTRACT = ("−", "-")
    MULTIPLY = ("×", "*")
    DIVIDE = ("÷", "/")
    PERCENT = ("%", "%")

    def __init__(self, glyph: str, token: str):
        self.glyph = glyph
        self.token = token

    @classmethod
    def from_token(cls, text: str) -> "Operator":
        for op in cls:
            if text in (op.glyph, op.token):
                return op
        raise UnknownOperatorError()


class PythonFloatProvider:
    """Aritmética con ``float`` y formato de pantalla a 12 decimales."""

    DISPLAY_SCALE = 1e12

    def precision(self):
        return contextlib.nullcontext()

    def parse(self, text: str) -> float:
        if text.endswith("."):
            text = text[:-1]
        try:
            value = float(text)
        except ValueError as exc:
            raise InvalidOperandError() from exc
        if not math.isfinite(value):
            raise InvalidOperandError()
        return value

    def from_int(self, value: int) -> float:
        return float(value)

    @staticmethod
    def is_finite(value) -> bool:
        return math.isfinite(value)

    def round_for_display(self, value: float) -> float:
        scaled = value * self.DISPLAY_SCALE
        if not math.isfinite(scaled):
            return value
        return math.floor(scaled + 0.5) / self.DISPLAY_SCALE

    def format_number(self, value: float) -> str:
        if not math.isfinite(value):
            return ERROR_TEXT

        rounded = self.round_for_display(value)
        if rounded == 0:
            return "0"
        if rounded.is_integer() and abs(rounded) < EXACT_INTEGER_MAX:
            return str(int(rounded))
        return number_text(repr(rounded))


def number_text(digits: str) -> str:
    """Texto de pantalla para un número dado con sus dígitos significativos.

    Notación posicional para 1e-6 <= |x| < 1e21 y exponencial fuera de
    ese rango (``1e-7``, ``1.5e+22``). Los dos proveedores la comparten.
    """
    value = Decimal(digits)
    if value == 0:
        return "0"
    if POSITIONAL_MIN <= abs(value) < POSITIONAL_MAX:
        text = format(value, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return format(value.normalize(), "e")


class FormulaEvaluator:
    """Reduce la expresión de pantalla de izquierda a derecha, sin precedencia."""

    _GLYPHS = {op.glyph: op.token for op in Operator}

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonFloatProvider()

    @property
    def provider(self):
        return self._provider

    def normalize(self, expression: str) -> str:
        expr = expression.strip()
        for glyph, token in self._GLYPHS.items():
            expr = expr.replace(glyph, token)
        return expr

    def tokenize(self, expression: str) -> list[str]:
        tokens = re.split(r"\s+", self.normalize(expression)) if expression.strip() else []
        if len(tokens) % 2 == 0 and tokens:
            # termina en operador a la espera del operando derecho
            tokens.pop()
        return tokens

    def apply(self, left, operator: Operator, right):
        """Aplica ``left <operator> right``.

        Raises:
            InvalidOperandError: operando o resultado no finito.
            DivideByZeroError: divisor igual a cero.
            UnknownOperatorError: operador fuera del teclado.
        """
        p = self._provider
        if not (p.is_finite(left) and p.is_finite(right)):
            raise InvalidOperandError()

        try:
            with p.precision():
                if operator is Operator.ADD:
                    result = left + right
                elif operator is Operator.SUBTRACT:
                    result = left - right
                elif operator is Operator.MULTIPLY:
                    result = left * right
                elif operator is Operator.DIVIDE:
                    if right == 0:
                        raise DivideByZeroError()
                    result = left / right
                elif operator is Operator.PERCENT:
                    result = (left / p.from_int(100)) * right
                else:
                    raise UnknownOperatorError()
        except OverflowError as exc:
            raise InvalidOperandError() from exc

        if not p.is_finite(result):
            raise InvalidOperandError()
        return result

    def evaluate(self, expression: str):
        """Devuelve el valor reducido o ``None`` si no hay nada que evaluar."""
        tokens = self.tokenize(expression)
        if not tokens:
            return None

        with self._provider.precision():
            acc = self._provider.parse(tokens[0])
            for i in range(1, len(tokens), 2):
                operator = Operator.from_token(tokens[i])
                right = self._provider.parse(tokens[i + 1])
                acc = self.apply(acc, operator, right)

        log.debug("Evaluado %r -> %s", expression, acc)
        return acc
