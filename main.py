"""Punto de entrada de la calculadora de teclado."""

import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_logging import setup_logging
from calculator_ui import CalculatorApp
from keypad_session import KeypadSession


USE_ARBITRARY_PRECISION = False
AP_WORKING_DIGITS = 30


def main():
    log = setup_logging()
    if USE_ARBITRARY_PRECISION:
        from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine

        engine = ArbitraryPrecisionCalculatorEngine(working_digits=AP_WORKING_DIGITS)
    else:
        engine = CalculatorEngine()

    root = tk.Tk()
    root.geometry("340x480")
    root.minsize(300, 440)
    CalculatorApp(root, session=KeypadSession(engine))
    log.info("Calculadora iniciada (motor: %s)", type(engine).__name__)
    root.mainloop()


if __name__ == "__main__":
    main()
