"""
Interfaz gráfica de la calculadora de teclado.

Usa tkinter. Solo traduce botones y teclas a eventos lógicos y
muestra el texto que devuelve la sesión; toda la lógica está en
KeypadSession.
"""

import logging
import tkinter as tk
from tkinter import font as tkfont

from keypad_events import key_for_label
from keypad_session import KeypadSession

log = logging.getLogger("calculator.ui")


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "display_fg": "#A6E3A1",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, nombre_accesible, tipo_color)

    KEYPAD = [
        [("C", "Clear", "special"), ("±", "Toggle sign", "special"),
         ("%", "Percent", "special"), ("÷", "Divide", "op")],

        [("7", "", "num"), ("8", "", "num"),
         ("9", "", "num"), ("×", "Multiply", "op")],

        [("4", "", "num"), ("5", "", "num"),
         ("6", "", "num"), ("−", "Subtract", "op")],

        [("1", "", "num"), ("2", "", "num"),
         ("3", "", "num"), ("+", "Add", "op")],

        [("0", "", "num"), (".", "Decimal point", "num"),
         ("=", "Equals", "equals")],
    ]

    # Teclas físicas cuyo keysym no coincide con la etiqueta del botón
    KEYSYMS = {
        "period": ".", "comma": ".", "plus": "+", "minus": "-",
        "asterisk": "*", "slash": "/", "percent": "%", "equal": "=",
        "KP_Add": "+", "KP_Subtract": "-", "KP_Multiply": "*",
        "KP_Divide": "/", "KP_Decimal": ".",
    }

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: KeypadSession | None = None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.session = session if session is not None else KeypadSession()

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_display = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.display_var = tk.StringVar(value=self.session.display)
        self.display_entry = tk.Entry(
            frame, textvariable=self.display_var, state="readonly",
            font=self._f_display, fg=self.C["display_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        )
        self.display_entry.pack(fill="x", pady=(4, 4))

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), max_cols)
            col_pos = 0
            for idx, (text, aria, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda t=text, a=aria: self._on_button(t, a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=8)
                col_pos += spans[idx]

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Columnas extra al último botón ('=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        label = self.KEYSYMS.get(event.keysym, event.keysym)
        if key_for_label(label) is None and event.char:
            label = event.char  # p. ej. KP_5 -> "5"
        self._on_button(label, "")
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _on_button(self, text: str, aria_label: str):
        key = key_for_label(text, aria_label)
        if key is None:
            log.debug("Etiqueta ignorada: %r", text)
            return
        self.display_var.set(self.session.press(key))
