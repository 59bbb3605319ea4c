"""
Motor de cálculo de la calculadora de teclado.

Este módulo provee la clase CalculatorEngine que la sesión de teclado
usa para interpretar operandos, resolver operaciones pendientes y
evaluar la expresión de la pantalla. Está diseñado como módulo
independiente que puede ser reemplazado por implementaciones
alternativas (e.g., precisión arbitraria con mpmath).

Contrato de interfaz:
    - evaluate(expression: str) -> número | None
    - commit(left, operator, right) -> número
    - parse_operand(text: str) -> número
    - percent(value) -> número
    - format_result(value) -> str
"""

from formula_evaluator import FormulaEvaluator, Operator, PythonFloatProvider


class CalculatorEngine:
    """Aritmética izquierda-a-derecha y formato de resultados."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonFloatProvider()
        self._evaluator = FormulaEvaluator(self._provider)

    @property
    def provider(self):
        return self._provider

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str):
        """Reduce la expresión de la pantalla.

        Devuelve ``None`` si la expresión está vacía o solo contiene un
        operador.

        Raises:
            DivideByZeroError: división por cero.
            InvalidOperandError: operando no finito o desbordamiento.
            UnknownOperatorError: token de operador desconocido.
        """
        return self._evaluator.evaluate(expression)

    def commit(self, left, operator: Operator, right):
        return self._evaluator.apply(left, operator, right)

    def parse_operand(self, text: str):
        return self._provider.parse(text)

    def percent(self, value):
        with self._provider.precision():
            return value / self._provider.from_int(100)

    # ── Formato del resultado ────────────────────────────────────

    def format_result(self, value) -> str:
        return self._provider.format_number(value)
