"""
Interactive terminal session.

- keys: key events, key-name parsing and the command keymap
- events: queue items (key press or tick)
- cursor: wraparound selection cursor
- input_pump: background thread feeding the event queue
- form: multi-line form buffer
- state: modal state machine and render snapshots
- render: curses renderer
- session: foreground loop and terminal entry point
"""
