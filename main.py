"""Punto de entrada de la calculadora."""

import tkinter as tk

from arithmetic_provider import MAX_FRACTION_DIGITS, DecimalArithmetic
from calculator_model import CalculatorModel
from calculator_ui import CalculatorApp


USE_ARBITRARY_PRECISION = False
AP_WORKING_DIGITS = 50
WINDOW_GEOMETRY = "372x520"


def build_model() -> CalculatorModel:
    if USE_ARBITRARY_PRECISION:
        from arbitrary_precision_arithmetic import MPMathArithmetic

        arithmetic = MPMathArithmetic(
            working_digits=AP_WORKING_DIGITS,
            max_fraction_digits=MAX_FRACTION_DIGITS,
        )
    else:
        arithmetic = DecimalArithmetic(max_fraction_digits=MAX_FRACTION_DIGITS)
    return CalculatorModel(arithmetic)


def main():
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    CalculatorApp(root, model=build_model())
    root.mainloop()


if __name__ == "__main__":
    main()
