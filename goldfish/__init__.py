"""Engine-side building blocks of a small game engine: commands, files, fonts, GUI, audio mixing and frame pacing."""

__version__ = "0.1.0"