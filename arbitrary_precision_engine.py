"""Motor de cálculo con precisión arbitraria basado en mpmath."""

from __future__ import annotations

from calculator_engine import CalculatorEngine
from calculator_errors import InvalidOperandError
from formula_evaluator import ERROR_TEXT, number_text

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathProvider:
    """Proveedor numérico basado en mpmath.

    Las operaciones se hacen con ``digits`` dígitos de trabajo; la
    pantalla sigue redondeando a 12 decimales, así que los dígitos
    extra solo eliminan el ruido binario antes de redondear.
    """

    MIN_DIGITS = 20
    GUARD_DIGITS = 4
    DISPLAY_DECIMALS = 12
    POSITIONAL_MAX = "1e21"

    def __init__(self, digits: int = 30):
        self._digits = max(self.MIN_DIGITS, digits)

    @property
    def digits(self) -> int:
        return self._digits

    def precision(self):
        return mp.workdps(self._digits)

    def parse(self, text: str):
        if text.endswith("."):
            text = text[:-1]
        try:
            with mp.workdps(self._digits):
                value = mp.mpf(text)
        except (TypeError, ValueError) as exc:
            raise InvalidOperandError() from exc
        if not mp.isfinite(value):
            raise InvalidOperandError()
        return value

    def from_int(self, value: int):
        return mp.mpf(value)

    @staticmethod
    def is_finite(value) -> bool:
        return bool(mp.isfinite(value))

    def round_for_display(self, value):
        with mp.workdps(self._digits):
            scale = mp.mpf(10) ** self.DISPLAY_DECIMALS
            return mp.floor(value * scale + mp.mpf("0.5")) / scale

    def format_number(self, value) -> str:
        if not mp.isfinite(value):
            return ERROR_TEXT

        with mp.workdps(self._digits):
            rounded = self.round_for_display(value)
            if rounded == 0:
                return "0"
            if mp.floor(rounded) == rounded and abs(rounded) < mp.mpf(self.POSITIONAL_MAX):
                return str(int(rounded))
            return number_text(mp.nstr(rounded, n=self._digits - self.GUARD_DIGITS))


class ArbitraryPrecisionCalculatorEngine(CalculatorEngine):
    """CalculatorEngine con aritmética mpmath."""

    def __init__(self, working_digits: int = 30):
        super().__init__(MPMathProvider(working_digits))

    @property
    def working_digits(self) -> int:
        return self._provider.digits
