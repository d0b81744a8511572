"""SessionReel records live message sessions and replays them with original timing."""

__version__ = "0.1.0"
