"""
Azure Vision - detect faces with estimated age and gender.
Requires AZURE_VISION_KEY and AZURE_VISION_ENDPOINT.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import AzureVisionClient

image = sys.argv[1] if len(sys.argv) > 1 else "samples/people.jpg"

with AzureVisionClient() as vision:
    analysis = vision.analyze_image(image)
    print(analysis.format_result())
