"""ecgsim: progressive synthetic ECG record generator."""

__all__ = [
    "config","errors","rng","rhythm","timegrid","ecg","store","scheduler","loader",
    "engine","render","export","validate"
]
