from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_engine import CalculatorEngine
from keypad_events import key_for_label
from keypad_session import KeypadSession, Phase
import sys


def _keys_for(sequence: str):
	"""Convierte "12 + 3.5 =" en teclas; los números se teclean dígito a dígito."""
	keys = []
	for chunk in sequence.split():
		whole = key_for_label(chunk)
		if whole is not None:
			keys.append(whole)
			continue
		for ch in chunk:
			key = key_for_label(ch)
			if key is None:
				raise SystemExit(f"Unknown key label: {ch!r}")
			keys.append(key)
	return keys


def _walk(sequence: str, *, engine=None):
	session = KeypadSession(engine)
	states = []
	for key in _keys_for(sequence):
		states.append(session.press(key))
	return session, states


def _final(sequence: str, *, engine=None) -> str:
	session, _ = _walk(sequence, engine=engine)
	return session.display


def inspect_key_states(sequence: str, *, arbitrary: bool = False) -> None:
	"""Imprime la pantalla tras cada tecla de la secuencia."""
	engine = ArbitraryPrecisionCalculatorEngine() if arbitrary else CalculatorEngine()
	session, states = _walk(sequence, engine=engine)

	print("Key inspection")
	print(f"sequence:       {sequence}")
	print(f"engine:         {type(engine).__name__}")
	print(f"keys pressed:   {len(states)}")
	for i, (key, text) in enumerate(zip(_keys_for(sequence), states), start=1):
		print(f"  {i}. {key.kind.value:<12} {text!r}")

	print(f"final phase:    {session.phase.value}")
	print(f"final display:  {session.display!r}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for sequence, expected in (
		("3 + 4 × 2 =", "14"),
		("7 + 3 =", "10"),
		("7 + 3 = + 2 =", "12"),
		("0.1 + 0.2 =", "0.3"),
		("5 ÷ 0 =", "Cannot divide by 0"),
		("50 %", "0.5"),
		("1 ÷ 3 =", "0.333333333333"),
		("2 − 5 =", "-3"),
		("0.000001 ÷ 10 =", "1e-7"),
	):
		actual = _final(sequence)
		expected_actual.append((sequence, expected, actual))
		checks.append((f"{sequence} -> {expected}", actual == expected))

	for sequence, expected in (
		("0.1 + 0.2 =", "0.3"),
		("3 + 4 × 2 =", "14"),
		("0.000001 ÷ 10 =", "1e-7"),
		("± =", "-"),
		("5 ÷ 0 =", "Cannot divide by 0"),
	):
		actual = _final(sequence, engine=ArbitraryPrecisionCalculatorEngine())
		expected_actual.append((f"{sequence} (mpmath)", expected, actual))
		checks.append((f"{sequence} -> {expected} with mpmath", actual == expected))

	session, _ = _walk("5 ÷ 0 = 7")
	checks.append(("digit after error starts fresh", session.display == "7"))
	checks.append(("error leaves just_evaluated false", not session.just_evaluated))

	session, _ = _walk("12.5 ± ±")
	checks.append(("double sign toggle restores operand", session.typed_operand == "12.5"))

	session, _ = _walk("4 . . 2")
	checks.append(("second decimal point ignored", session.typed_operand == "4.2"))

	session, _ = _walk("9 + 1 = C")
	checks.append((
		"clear returns to initial state",
		session.display == ""
		and session.accumulated_operand is None
		and session.pending_operator is None
		and not session.just_evaluated
		and session.phase is Phase.EMPTY,
	))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_keypad_checks.py
	#   python regression_keypad_checks.py --inspect "7 + 3 = + 2 ="
	#   python regression_keypad_checks.py --inspect "0.1 + 0.2 =" --mpmath
	if "--inspect" in sys.argv:
		try:
			sequence = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		inspect_key_states(sequence, arbitrary="--mpmath" in sys.argv)
	else:
		run_regressions()
