"""Errores de cálculo de la calculadora de teclado.

Cada error lleva el mensaje corto que se muestra en la pantalla.
Todos son terminales solo para la expresión actual: la sesión los
captura, se reinicia y muestra ``message``.
"""


class CalculationError(ArithmeticError):
    """Fallo de cálculo con mensaje para el usuario."""

    default_message = "Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DivideByZeroError(CalculationError, ZeroDivisionError):
    default_message = "Cannot divide by 0"


class InvalidOperandError(CalculationError, ValueError):
    """Operando no finito o que no se puede interpretar como número."""


class UnknownOperatorError(CalculationError, ValueError):
    """Token de operador que no pertenece al teclado."""
