#!/usr/bin/env python3
"""
Calculator GUI

Dark-themed Tkinter window with a basic keypad and an optional scientific panel.
The window holds no calculator state: every button and key press is turned into
a command token and handed to the Controller, which calls back into the
set_* methods below with the strings to show.
"""

import tkinter as tk
from typing import List, Optional

from calculator_gui.controller import (
    CLOSE_REQUEST,
    Controller,
    ViewKind,
    command_for_key,
)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 340
WINDOW_HEIGHT = 500
SCIENTIFIC_WIDTH = 560

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # digit tiles
OP_BG = "#f29d38"       # operator tiles
SCI_BG = "#3a3d41"      # scientific tiles
FG = "#E6EEF3"          # foreground text (light)
DIM_FG = "#8a9299"      # expression line

TITLE_FONT = ("Segoe UI", 13, "bold")
DISPLAY_FONT = ("Consolas", 26)
EXPRESSION_FONT = ("Consolas", 12)
TILE_FONT = ("Segoe UI", 13)

BASIC_TILES: List[List[str]] = [
    ["AC", "±", "%", "÷"],
    ["7", "8", "9", "x"],
    ["4", "5", "6", "-"],
    ["1", "2", "3", "+"],
    ["Sci", "0", ".", "="],
]
SCIENTIFIC_TILES: List[List[str]] = [
    ["sin", "cos", "tan", "(", ")"],
    ["asin", "acos", "atan", "π", "n!"],
    ["ln", "exp", "√", "x²", "xʸ"],
]
OPERATOR_LABELS = {"÷", "x", "-", "+", "="}


class CalculatorGUI(tk.Tk):
    def __init__(self, view: ViewKind = ViewKind.SCIENTIFIC):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(300, 440)
        self.configure(bg=BG)

        self.clear_button: Optional[tk.Button] = None
        self.scientific_frame: Optional[tk.Frame] = None

        # Build UI sections
        self._build_header(view)
        self._build_display()
        self._build_keypads(view)

        self.controller = Controller(self, view=view)
        self.controller.handle_input("AC")

        self.bind("<Key>", self._on_key, add="+")

    # -------------------------
    # Layout
    # -------------------------
    def _build_header(self, view: ViewKind):
        header = tk.Frame(self, bg=PANEL_BG, height=40)
        header.pack(fill="x", side="top")
        title = "Scientific" if view is ViewKind.SCIENTIFIC else "Basic"
        tk.Label(header, text=title, bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=10, pady=6)

    def _build_display(self):
        """Expression line (last evaluated expression) above the main display."""
        disp = tk.Frame(self, bg=PANEL_BG)
        disp.pack(fill="x", padx=8, pady=(8, 0))
        self.expr_var = tk.StringVar()
        tk.Label(disp, textvariable=self.expr_var, bg=PANEL_BG, fg=DIM_FG,
                 anchor="e", font=EXPRESSION_FONT).pack(fill="x", padx=6, pady=(6, 0))
        self.display_var = tk.StringVar(value="0")
        tk.Label(disp, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                 anchor="e", font=DISPLAY_FONT).pack(fill="x", padx=6, pady=(0, 6))

    def _build_keypads(self, view: ViewKind):
        body = tk.Frame(self, bg=PANEL_BG)
        body.pack(fill="both", expand=True, padx=8, pady=8)

        # Scientific panel sits left of the basic keypad; packed only when shown
        if view is ViewKind.SCIENTIFIC:
            self.scientific_frame = tk.Frame(body, bg=PANEL_BG)
            self._build_tiles(self.scientific_frame, SCIENTIFIC_TILES, SCI_BG)

        self.basic_frame = tk.Frame(body, bg=PANEL_BG)
        self.basic_frame.pack(side="right", fill="both", expand=True)
        self._build_tiles(self.basic_frame, BASIC_TILES, BTN_BG)

    def _build_tiles(self, parent: tk.Frame, tiles: List[List[str]], bg: str):
        """Grid of equally weighted tiles; each tile sends its label as a command."""
        for r, row in enumerate(tiles):
            for c, label in enumerate(row):
                tile_bg = OP_BG if label in OPERATOR_LABELS else bg
                btn = tk.Button(parent, text=label, bg=tile_bg, fg=FG, relief="flat",
                                font=TILE_FONT, command=self._map_button(label))
                btn.grid(row=r, column=c, sticky="nsew", padx=3, pady=3)
                if label == "AC":
                    self.clear_button = btn
                parent.grid_columnconfigure(c, weight=1)
            parent.grid_rowconfigure(r, weight=1)

    def _map_button(self, label: str):
        if label == "AC":
            # label flips between AC and backspace with the buffer state
            return lambda: self.controller.handle_clear_button()
        return lambda l=label: self.controller.handle_input(l)

    def _on_key(self, event):
        command = command_for_key(event.char, event.keysym)
        if command == CLOSE_REQUEST:
            self.destroy()
        elif command is not None:
            self.controller.handle_input(command)

    # -------------------------
    # Display protocol
    # -------------------------
    def set_display(self, text: str) -> None:
        self.display_var.set(text)

    def set_expression(self, text: str) -> None:
        self.expr_var.set(text)

    def set_clear_label(self, label: str) -> None:
        if self.clear_button is not None:
            self.clear_button.config(text=label)

    def set_scientific_visible(self, visible: bool) -> None:
        if self.scientific_frame is None:
            return
        if visible:
            self.geometry(f"{SCIENTIFIC_WIDTH}x{WINDOW_HEIGHT}")
            self.scientific_frame.pack(side="left", fill="both", expand=True, padx=(0, 6))
        else:
            self.scientific_frame.pack_forget()
            self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
