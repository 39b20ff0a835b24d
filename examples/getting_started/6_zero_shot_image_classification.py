"""
Zero-shot image classification with a CLIP image encoder exported to ONNX.

Label embeddings are loaded from a .npy file produced by the matching CLIP text
encoder, one row per label in the order given below.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import ZeroShotImageClassifier

labels = ["cat", "dog", "car", "airplane"]

classifier = ZeroShotImageClassifier.from_onnx(
    image_model_path="models/clip_image_encoder.onnx",
    labels=labels,
    label_embeddings_path="models/clip_label_embeddings.npy"
)

image_path = sys.argv[1] if len(sys.argv) > 1 else "samples/cat.jpg"
result = classifier.classify(image_path)
print(result.format_result())
