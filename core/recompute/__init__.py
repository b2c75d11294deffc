from core.recompute.trigger import RecomputeTrigger

__all__ = ['RecomputeTrigger']
