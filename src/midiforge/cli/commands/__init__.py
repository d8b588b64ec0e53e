"""CLI commands for midiforge."""

from .ask import ask
from .config import config
from .generate import generate
from .init import init
from .learn import learn
from .ports import ports

__all__ = ["ask", "config", "generate", "init", "learn", "ports"]
