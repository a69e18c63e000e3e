"""Entry point: glues pystray (daemon thread) with tkinter (main thread)."""

import ctypes
import logging
import sys
import threading

from calendar_window import DatePickerWindow
from date_value import ConfigError, DateValue
from icon_gen import create_icon_image
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # DPI awareness so positions / fonts are crisp on Hi-DPI monitors
    try:
        ctypes.windll.shcore.SetProcessDpiAwareness(1)
    except (AttributeError, OSError):
        pass

    def copy_to_clipboard(d: DateValue) -> None:
        picker_win.root.clipboard_clear()
        picker_win.root.clipboard_append(d.isoformat())

    try:
        picker_win = DatePickerWindow(on_date_click=copy_to_clipboard)
    except ConfigError as e:
        logger.error("Invalid date picker settings: %s", e)
        return 1

    # Callbacks marshalled onto the tkinter main thread
    def on_pick() -> None:
        picker_win.root.after(0, picker_win.toggle)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            picker_win.root.destroy()
        picker_win.root.after(0, _quit)

    def on_settings() -> None:
        picker_win.root.after(0, picker_win.open_settings)

    tray = create_tray(create_icon_image(), on_pick, on_exit, on_settings=on_settings)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    picker_win.root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
