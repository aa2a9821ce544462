"""
Interfaz gráfica de la calculadora de una pantalla.

Usa tkinter. No contiene aritmética: cada botón o tecla se traduce en una
acción que se despacha al CalculatorModel, y la pantalla se actualiza por
suscripción al modelo.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_keys import COLUMN_SPANS, KEYPAD, action_for_keysym, handle_action
from calculator_model import CalculatorModel


def scaled_font_size(
    length: int,
    base_size: int,
    visible_chars: int,
    min_scale: float,
) -> int:
    """Tamaño de fuente para que `length` caracteres quepan en el campo."""
    if length <= visible_chars:
        return base_size
    scale = max(min_scale, visible_chars / length)
    return max(1, int(round(base_size * scale)))


# ═════════════════════════════════════════════════════════════════
#  Widget: pantalla de resultado que encoge la fuente
# ═════════════════════════════════════════════════════════════════

class ResultDisplay:
    """Entry de solo lectura; reduce la fuente si el texto no cabe."""

    VISIBLE_CHARS = 12
    MIN_SCALE = 0.2

    def __init__(self, parent, font: tkfont.Font, **kw):
        self._font = font
        self._base_size = abs(int(font.cget("size")))
        self._var = tk.StringVar(value="0")
        kw.setdefault("width", self.VISIBLE_CHARS + 1)
        self._entry = tk.Entry(parent, textvariable=self._var, font=font,
                               state="readonly", **kw)

    @property
    def widget(self):
        return self._entry

    def set_text(self, text: str):
        self._var.set(text)
        self._font.configure(size=scaled_font_size(
            len(text), self._base_size, self.VISIBLE_CHARS, self.MIN_SCALE,
        ))

    def get_text(self) -> str:
        return self._var.get()


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "result_fg":  "#A6E3A1",
    }

    RESULT_FONT_SIZE = 36

    def __init__(self, root: tk.Tk, model=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self.model = model if model is not None else CalculatorModel()

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

        self.result_display.set_text(self.model.display)
        self._unsubscribe = self.model.subscribe(self.result_display.set_text)

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_result = tkfont.Font(family="Consolas",
                                     size=self.RESULT_FONT_SIZE, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=20)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.result_display = ResultDisplay(
            frame, self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        )

        tk.Button(
            frame, text="Copiar", font=self._f_small,
            bg=self.C["func"], fg=self.C["func_fg"],
            activebackground=self.C["special"], relief="flat",
            cursor="hand2", command=self._copy_result, padx=8,
        ).pack(side="right", padx=(6, 0))

        self.result_display.widget.pack(side="right", fill="x", expand=True)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(
            sum(COLUMN_SPANS.get(action, 1) for _text, action, _kind in row)
            for row in KEYPAD
        )
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(KEYPAD):
            spans = self._compute_spans(row_def, max_cols)
            col_pos = 0
            for idx, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=14)
                col_pos += spans[idx]

        for r in range(len(KEYPAD)):
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(row_def, max_cols: int) -> list[int]:
        """Columnas por botón; las sobrantes van al último botón."""
        spans = [COLUMN_SPANS.get(action, 1) for _text, action, _kind in row_def]
        spans[-1] += max(0, max_cols - sum(spans))
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        action = action_for_keysym(event.char, event.keysym)
        if action is None:
            return None
        self._on_key(action)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        handle_action(self.model, action)

    # ── Copiar resultado ─────────────────────────────────────────

    def _copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.model.display)
