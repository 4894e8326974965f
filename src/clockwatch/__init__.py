"""clockwatch: terminal stopwatch with pause/resume and lap splits."""

# Application loop
from clockwatch.app import App, run_app

# Stopwatch state
from clockwatch.clock import Clockwatch, format_duration

# Components
from clockwatch.components import Block, Paragraph

# Configuration
from clockwatch.config import Config, load_config

# Input events
from clockwatch.events import Event, KeyEvent, KeyEventKind, PasteEvent, ResizeEvent

# Rendering
from clockwatch.frame import Frame, Widget
from clockwatch.keys import parse_event, parse_key
from clockwatch.layout import Constraint, Rect, split_vertical

# Terminal interface and implementation
from clockwatch.terminal import ProcessTerminal, Terminal

__version__ = "0.1.0"

__all__ = [
    # App
    "App",
    "run_app",
    # Clock
    "Clockwatch",
    "format_duration",
    # Components
    "Block",
    "Paragraph",
    # Config
    "Config",
    "load_config",
    # Events
    "Event",
    "KeyEvent",
    "KeyEventKind",
    "PasteEvent",
    "ResizeEvent",
    # Rendering
    "Frame",
    "Widget",
    "Constraint",
    "Rect",
    "split_vertical",
    # Keys
    "parse_event",
    "parse_key",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
