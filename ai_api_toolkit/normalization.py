"""
Numerically stable softmax normalization.

Converts a vector of logits into a probability distribution. The maximum
logit is subtracted before exponentiating so large inputs cannot overflow.
"""

from typing import Sequence, Union
import numpy as np
from .exceptions import InvalidInputError


ArrayLike = Union[Sequence[float], np.ndarray]


def softmax(logits: ArrayLike, temperature: float = 1.0) -> np.ndarray:
    """
    Normalize logits into probabilities along the last axis.

    Args:
        logits: 1-D sequence of scores, or a 2-D array of row-wise scores
        temperature: Positive divisor applied to the logits before normalizing

    Returns:
        Float64 array of the same shape, non-negative, each row summing to 1

    Raises:
        InvalidInputError: If the input is empty, not 1-D/2-D, contains
            non-finite values, or temperature is not positive
    """
    if temperature is None or not temperature > 0:
        raise InvalidInputError(f"Temperature must be positive, got {temperature}")

    try:
        scores = np.asarray(logits, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Logits must be numeric: {e}")

    if scores.ndim not in (1, 2):
        raise InvalidInputError(f"Logits must be 1-D or 2-D, got {scores.ndim} dimensions")

    if scores.size == 0 or scores.shape[-1] == 0:
        raise InvalidInputError("Logits cannot be empty")

    if not np.all(np.isfinite(scores)):
        raise InvalidInputError("Logits must be finite")

    # Shift before scaling so the result stays in [-inf, 0]
    with np.errstate(over="ignore"):
        shifted = (scores - np.max(scores, axis=-1, keepdims=True)) / temperature
    exps = np.exp(shifted)
    return exps / np.sum(exps, axis=-1, keepdims=True)
