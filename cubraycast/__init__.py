"""Grid ray caster for .cub scene files: lexing, map checks, ray casting and drawing."""

__version__ = "0.1.0"