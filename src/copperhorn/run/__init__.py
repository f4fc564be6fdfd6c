from copperhorn.run.config import Config

__all__ = ['Config']
