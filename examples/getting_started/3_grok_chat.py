"""
Chat with xAI's Grok - requires XAI_API_KEY.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import create_completion_client, ProviderError

client = create_completion_client("xai")

try:
    result = client.complete(
        "What is the meaning of life, the universe, and everything?",
        system_prompt="You are Grok, a chatbot inspired by the Hitchhiker's Guide to the Galaxy.",
        temperature=0.7
    )
    print(result.text)
except ProviderError as e:
    print(f"Grok request failed ({e.status_code}): {e}")
