"""
Máquina de estados de entrada de la calculadora de teclado.

Cada instancia de KeypadSession es una calculadora independiente: no
hay estado a nivel de módulo. La expresión de la pantalla no se edita
como texto; se vuelve a construir en cada lectura a partir de los
segmentos confirmados (operando, operador) y del operando en curso.

Estados:
    EMPTY                  nada escrito
    TYPING_FIRST_OPERAND   escribiendo el primer operando
    OPERATOR_PENDING       operando confirmado y operador elegido
    TYPING_SECOND_OPERAND  escribiendo el operando derecho
    EVALUATED              justo después de un "=" correcto
    ERROR_DISPLAYED        la pantalla muestra un mensaje de error
"""

import logging
from enum import Enum

from calculator_engine import CalculatorEngine
from calculator_errors import CalculationError
from formula_evaluator import Operator
from keypad_events import Key, KeyKind

log = logging.getLogger("calculator.session")


class Phase(Enum):
    EMPTY = "empty"
    TYPING_FIRST_OPERAND = "typing_first_operand"
    OPERATOR_PENDING = "operator_pending"
    TYPING_SECOND_OPERAND = "typing_second_operand"
    EVALUATED = "evaluated"
    ERROR_DISPLAYED = "error_displayed"


class KeypadSession:
    """Estado de una calculadora y una transición por tecla lógica."""

    def __init__(self, engine=None):
        self.engine = engine if engine is not None else CalculatorEngine()
        self.clear()

    # ── Estado derivado ──────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        if self._message is not None:
            return Phase.ERROR_DISPLAYED
        if self.just_evaluated:
            return Phase.EVALUATED
        if self.accumulated_operand is None:
            if self.typed_operand:
                return Phase.TYPING_FIRST_OPERAND
            return Phase.EMPTY
        if self.typed_operand:
            return Phase.TYPING_SECOND_OPERAND
        return Phase.OPERATOR_PENDING

    @property
    def display(self) -> str:
        phase = self.phase
        if phase is Phase.ERROR_DISPLAYED:
            return self._message
        if phase is Phase.EVALUATED:
            return self.engine.format_result(self.accumulated_operand)
        committed = "".join(f"{text} {op.glyph} " for text, op in self._segments)
        return committed + self.typed_operand

    def _has_typed_number(self) -> bool:
        # un "-" suelto es solo un signo a la espera de dígitos
        return self.typed_operand not in ("", "-")

    # ── Teclas ───────────────────────────────────────────────────

    def press(self, key: Key) -> str:
        """Aplica una tecla lógica y devuelve el texto de la pantalla."""
        if key.kind is KeyKind.DIGIT:
            self.input_digit(key.value)
        elif key.kind is KeyKind.DECIMAL:
            self.input_decimal()
        elif key.kind is KeyKind.CLEAR:
            self.clear()
        elif key.kind is KeyKind.TOGGLE_SIGN:
            self.toggle_sign()
        elif key.kind is KeyKind.PERCENT:
            self.apply_percent()
        elif key.kind is KeyKind.OPERATOR:
            self.set_operator(key.value)
        elif key.kind is KeyKind.EQUALS:
            self.evaluate()
        else:
            raise ValueError(f"Tecla desconocida: {key!r}")

        display = self.display
        log.debug("%s -> %s %r", key.kind.value, self.phase.value, display)
        return display

    def clear(self):
        self.typed_operand = ""
        self.accumulated_operand = None
        self.pending_operator = None
        self.just_evaluated = False
        self._segments: list[tuple[str, Operator]] = []
        self._message = None

    def input_digit(self, digit: str):
        if self.phase in (Phase.EVALUATED, Phase.ERROR_DISPLAYED):
            self.clear()

        if self.typed_operand in ("0", "-0"):
            self.typed_operand = self.typed_operand[:-1] + digit
        else:
            self.typed_operand += digit

    def input_decimal(self):
        if self.phase in (Phase.EVALUATED, Phase.ERROR_DISPLAYED):
            self.clear()

        if not self._has_typed_number():
            self.typed_operand += "0."
        elif "." not in self.typed_operand:
            self.typed_operand += "."

    def toggle_sign(self):
        phase = self.phase
        if phase is Phase.ERROR_DISPLAYED:
            self.clear()
        elif phase is Phase.EVALUATED:
            self._adopt_result()

        typed = self.typed_operand
        if typed.startswith("-"):
            self.typed_operand = typed[1:]
        else:
            self.typed_operand = "-" + typed

    def apply_percent(self):
        phase = self.phase
        if phase is Phase.ERROR_DISPLAYED:
            return
        if phase is Phase.EVALUATED:
            self._adopt_result()

        try:
            if self._has_typed_number():
                value = self.engine.parse_operand(self.typed_operand)
                self.typed_operand = self.engine.format_result(self.engine.percent(value))
            elif self.accumulated_operand is not None:
                self.accumulated_operand = self.engine.percent(self.accumulated_operand)
                # el acumulado pasa a ser el único término de la expresión
                self._segments = [
                    (self.engine.format_result(self.accumulated_operand), self.pending_operator)
                ]
                self.typed_operand = ""
        except CalculationError as exc:
            self._fail(exc)

    def set_operator(self, operator: Operator):
        phase = self.phase

        if phase is Phase.EVALUATED:
            self._segments = [(self.display, operator)]
            self.typed_operand = ""
            self.just_evaluated = False
        elif phase is Phase.ERROR_DISPLAYED:
            self.clear()
        elif phase in (Phase.EMPTY, Phase.TYPING_FIRST_OPERAND):
            if self._has_typed_number():
                try:
                    self.accumulated_operand = self.engine.parse_operand(self.typed_operand)
                except CalculationError as exc:
                    self._fail(exc)
                    return
                self._segments.append((self.typed_operand, operator))
            self.typed_operand = ""
        elif self._has_typed_number():
            try:
                right = self.engine.parse_operand(self.typed_operand)
                self.accumulated_operand = self.engine.commit(
                    self.accumulated_operand, self.pending_operator, right
                )
            except CalculationError as exc:
                self._fail(exc)
                return
            self._segments.append((self.typed_operand, operator))
            self.typed_operand = ""
        else:
            text, _ = self._segments[-1]
            self._segments[-1] = (text, operator)
            self.typed_operand = ""

        self.pending_operator = operator

    def evaluate(self):
        if self.phase is Phase.ERROR_DISPLAYED:
            return
        if not self._segments and not self._has_typed_number():
            # solo un "-" suelto: al quitarlo no queda nada que evaluar
            return

        expression = self.display
        try:
            result = self.engine.evaluate(expression)
        except CalculationError as exc:
            self._fail(exc)
            return
        if result is None:
            return

        self.clear()
        self.accumulated_operand = result
        self.just_evaluated = True

    # ── Auxiliares ───────────────────────────────────────────────

    def _adopt_result(self):
        text = self.display
        self.clear()
        self.typed_operand = text

    def _fail(self, exc: CalculationError):
        log.warning("Cálculo fallido (%s): %s", type(exc).__name__, exc.message)
        self.clear()
        self._message = exc.message
