from .visualizer import Visualizer

__all__ = ["Visualizer"]
