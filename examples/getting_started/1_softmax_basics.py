"""
Softmax basics - turn raw model scores into probabilities.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import softmax, LabelProbabilities

logits = [2.0, 1.0, 0.1]
print("Softmax of", logits)
print("=" * 50)
for score, probability in zip(logits, softmax(logits)):
    print(f"  {score:>5.1f} -> {probability:.3f}")

# Huge scores don't overflow because the maximum is subtracted first
print("\nLarge logits:", softmax([1000.0, 1001.0, 1002.0]).round(3))

# Attach labels to get a read-only distribution
sentiment = LabelProbabilities.from_logits(["positive", "neutral", "negative"], [3.1, 0.4, -1.2])
print(f"\nPredicted sentiment: {sentiment.top_label} ({sentiment.top_probability:.1%})")
