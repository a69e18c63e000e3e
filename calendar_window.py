"""tkinter rendering of the date picker: header, month buttons and day grid."""

import logging
import tkinter as tk
from tkinter import font as tkfont
from tkinter import messagebox
from typing import Callable

from calendar_navigation import Granularity
from date_picker import DatePicker
from date_value import ConfigError, DateValue
from settings import load_settings, picker_options, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
SEL_BG = "#B3D7F2"
ALT_BG = "#E5F1FB"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
DISABLED_FG = "#BBBBBB"


class _ToolTip:
    """Lightweight shared tooltip, used for the arrow buttons' labels."""

    __slots__ = ("_root", "_tw")

    def __init__(self, root: tk.Misc) -> None:
        self._root = root
        self._tw: tk.Toplevel | None = None

    def show(self, widget: tk.Widget, text: str) -> None:
        self.hide()
        tw = tk.Toplevel(self._root)
        tw.wm_overrideredirect(True)
        tw.wm_attributes("-topmost", True)
        lbl = tk.Label(
            tw, text=text, bg="#FFFFE0", fg="black",
            relief="solid", borderwidth=1, padx=6, pady=3, justify="left",
        )
        lbl.pack()
        x = widget.winfo_rootx() + widget.winfo_width() // 2
        y = widget.winfo_rooty() + widget.winfo_height() + 2
        tw.wm_geometry(f"+{x}+{y}")
        self._tw = tw

    def hide(self) -> None:
        if self._tw:
            self._tw.destroy()
            self._tw = None


class DatePickerWidget(tk.Frame):
    """Renders a :class:`DatePicker` and forwards clicks to it.

    All date logic lives in the picker; this class only mirrors its state
    into pre-allocated widgets after every action.
    """

    def __init__(self, master: tk.Misc, picker: DatePicker,
                 font_size: int | None = None,
                 width: int | None = None, height: int | None = None) -> None:
        super().__init__(master, bg=GRID_BG, padx=6, pady=4)
        self.picker = picker
        self._setup_fonts(font_size or 9)
        self._tooltip = _ToolTip(self)

        self._build_header()
        self._body = tk.Frame(self, bg=GRID_BG)
        self._body.pack(fill="both", expand=True)
        self._build_month_buttons()
        self._build_day_grid()

        if width and height:
            self.configure(width=width, height=height)
            self.pack_propagate(False)
        self.refresh()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self, size: int) -> None:
        families = tkfont.families(self)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=size)
        self.font_bold = tkfont.Font(family=base, size=size, weight="bold")
        self.font_header = tkfont.Font(family=base, size=size + 1, weight="bold")
        self.font_nav = tkfont.Font(family=base, size=size + 3, weight="bold")

    # ------------------------------------------------------------------
    # Build (once): header row + pooled month buttons and day cells
    # ------------------------------------------------------------------
    def _build_header(self) -> None:
        nav = tk.Frame(self, bg=HEADER_BG)
        nav.pack(fill="x", pady=(0, 2))

        self.btn_prev = tk.Button(
            nav, text="◀", font=self.font_nav, bg=HEADER_BG, relief="flat",
            command=lambda: self._act(self.picker.step_backward),
        )
        self.btn_prev.pack(side="left", padx=6)

        self.btn_next = tk.Button(
            nav, text="▶", font=self.font_nav, bg=HEADER_BG, relief="flat",
            command=lambda: self._act(self.picker.step_forward),
        )
        self.btn_next.pack(side="right", padx=6)

        self.btn_main = tk.Button(
            nav, font=self.font_header, bg=HEADER_BG, relief="flat",
            command=lambda: self._act(self.picker.toggle_view),
        )
        self.btn_main.pack(side="top", pady=2)

        for btn, label in ((self.btn_prev, lambda: self.picker.aria_prev),
                           (self.btn_next, lambda: self.picker.aria_next)):
            btn.bind("<Enter>", lambda e, lb=label: self._tooltip.show(e.widget, lb()))
            btn.bind("<Leave>", lambda _e: self._tooltip.hide())

    def _build_month_buttons(self) -> None:
        self._months_frame = tk.Frame(self._body, bg=GRID_BG)
        self._month_buttons: list[tk.Button] = []
        for i in range(12):
            btn = tk.Button(
                self._months_frame, font=self.font_normal, width=10, relief="flat",
                command=lambda i=i: self._on_month(i),
            )
            btn.grid(row=i // 3, column=i % 3, padx=2, pady=2, sticky="we")
            self._month_buttons.append(btn)
        self._month_data = []

    def _build_day_grid(self) -> None:
        self._days_frame = tk.Frame(self._body, bg=GRID_BG)
        self._day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self._days_frame, font=self.font_bold, bg=GRID_BG,
                           fg="#333333", width=3)
            lbl.grid(row=0, column=col)
            self._day_headers.append(lbl)

        self._day_buttons: list[list[tk.Button]] = []
        for r in range(6):  # max 6 weeks
            row_btns: list[tk.Button] = []
            for c in range(7):
                btn = tk.Button(
                    self._days_frame, font=self.font_normal, width=3,
                    relief="flat", borderwidth=0,
                    command=lambda r=r, c=c: self._on_day(r, c),
                )
                btn.grid(row=r + 1, column=c, padx=1, pady=1)
                row_btns.append(btn)
            self._day_buttons.append(row_btns)
        self._day_data = []

    # ------------------------------------------------------------------
    # Refresh from picker state
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        picker = self.picker
        controller = picker.controller
        self._tooltip.hide()
        self.btn_prev.configure(state=_state(controller.can_step_backward))
        self.btn_next.configure(state=_state(controller.can_step_forward))
        self.btn_main.configure(text=picker.header_label(),
                                state=_state(controller.can_toggle_view))

        if picker.granularity is Granularity.MONTH:
            self._days_frame.pack_forget()
            self._fill_months()
            self._months_frame.pack(fill="both", expand=True)
        else:
            self._months_frame.pack_forget()
            self._fill_days()
            self._days_frame.pack(fill="both", expand=True)

    def _fill_months(self) -> None:
        self._month_data = self.picker.month_cells()
        for btn, cell in zip(self._month_buttons, self._month_data):
            btn.configure(
                text=cell.label,
                state=_state(not cell.disabled),
                bg=ALT_BG if cell.highlighted else GRID_BG,
                cursor="" if cell.disabled else "hand2",
            )

    def _fill_days(self) -> None:
        for lbl, name in zip(self._day_headers, self.picker.weekday_names()):
            lbl.configure(text=name)

        self._day_data = self.picker.day_cells()
        for r, row in enumerate(self._day_data):
            for c, cell in enumerate(row):
                btn = self._day_buttons[r][c]
                if cell is None:
                    btn.configure(text="", state="disabled", bg=GRID_BG, cursor="")
                    continue
                bg, fg = self._day_colors(cell.today, cell.selected)
                btn.configure(
                    text=str(cell.date.day),
                    state=_state(not cell.disabled),
                    bg=bg, fg=fg, disabledforeground=DISABLED_FG,
                    font=self.font_bold if cell.today else self.font_normal,
                    cursor="" if cell.disabled else "hand2",
                )

    @staticmethod
    def _day_colors(is_today: bool, is_selected: bool) -> tuple[str, str]:
        if is_selected:
            return SEL_BG, "black"
        if is_today:
            return ACCENT, "white"
        return GRID_BG, "black"

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _act(self, action: Callable[[], bool]) -> None:
        if action():
            self.refresh()

    def _on_month(self, index: int) -> None:
        if index < len(self._month_data) and self.picker.click_month(self._month_data[index]):
            self.refresh()

    def _on_day(self, r: int, c: int) -> None:
        if r >= len(self._day_data):
            return
        cell = self._day_data[r][c]
        if cell is not None and self.picker.click_day(cell):
            self.refresh()


def _state(enabled: bool) -> str:
    return "normal" if enabled else "disabled"


class DatePickerWindow:
    """Pop-up window hosting a :class:`DatePickerWidget` next to the pointer."""

    def __init__(self, on_date_click: Callable[[DateValue], None] | None = None) -> None:
        self.root = tk.Tk()
        self.root.title("Mini Date Picker")
        self.root.resizable(False, False)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._on_date_click = on_date_click
        self._settings = load_settings()
        self.widget: DatePickerWidget | None = None
        self._mount(self._settings)

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    def _build_picker(self, settings: dict) -> DatePicker:
        return DatePicker(on_date_click=self._date_clicked, **picker_options(settings))

    def _mount(self, settings: dict) -> None:
        picker = self._build_picker(settings)
        if self.widget is not None:
            self.widget.destroy()
        self.widget = DatePickerWidget(self.root, picker)
        self.widget.pack()

    def _date_clicked(self, d: DateValue) -> None:
        logger.info("Picked %s", d)
        if self._on_date_click is not None:
            self._on_date_click(d)
        self.hide()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Language:").grid(row=0, column=0, sticky="w", pady=4)
        lang_entry = tk.Entry(frame, width=10)
        lang_entry.insert(0, self._settings["lang"])
        lang_entry.grid(row=0, column=1, padx=(8, 0), pady=4)

        tk.Label(frame, text="First weekday (0=Mon):").grid(
            row=1, column=0, sticky="w", pady=4,
        )
        spin_weekday = tk.Spinbox(frame, from_=0, to=6, width=4)
        spin_weekday.delete(0, "end")
        spin_weekday.insert(0, str(self._settings["first_weekday"]))
        spin_weekday.grid(row=1, column=1, padx=(8, 0), pady=4)

        months_only_var = tk.BooleanVar(value=self._settings["months_only"])
        tk.Checkbutton(
            frame, text="Pick months only", variable=months_only_var,
        ).grid(row=2, column=0, columnspan=2, sticky="w", pady=4)

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=3, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            try:
                first_weekday = int(spin_weekday.get())
            except ValueError:
                return
            settings = dict(self._settings)
            settings["lang"] = lang_entry.get().strip()
            settings["first_weekday"] = first_weekday
            settings["months_only"] = months_only_var.get()
            try:
                self.widget.picker.reconfigure(
                    lang=settings["lang"], first_weekday=first_weekday,
                    months_only=settings["months_only"],
                )
            except ConfigError as e:
                messagebox.showerror("Invalid settings", str(e), parent=dlg)
                return
            self._settings = settings
            save_settings(settings)
            self.widget.refresh()
            dlg.destroy()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(
            side="left", padx=4,
        )
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4,
        )

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.widget.picker.refresh_now()
        self.widget.refresh()
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Position next to the pointer, kept on screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        px, py = self.root.winfo_pointerxy()
        x = max(0, min(px - win_w // 2, self.root.winfo_screenwidth() - win_w - 12))
        y = max(0, min(py - win_h - 12, self.root.winfo_screenheight() - win_h - 12))
        self.root.geometry(f"+{x}+{y}")
