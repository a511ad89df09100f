from .from_arviz import draws_from_inference_data, get_divergences

__all__ = ["draws_from_inference_data", "get_divergences"]
