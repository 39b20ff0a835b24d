"""
OpenAI-style completions - requires OPENAI_API_KEY.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import OpenAICompletionsClient, AuthenticationError, RateLimitError, ProviderError

with OpenAICompletionsClient() as client:
    try:
        result = client.complete("Write a haiku about code review.", max_tokens=60)
        print(result.text)
        print(f"\nTokens used: {result.total_tokens}")

        answer = client.ask("Explain idempotency in one sentence.", system_prompt="You are a backend engineer.")
        print(f"\n{answer}")

    except AuthenticationError:
        print("Unauthorized: check OPENAI_API_KEY")
    except RateLimitError:
        print("Rate limited: try again later")
    except ProviderError as e:
        print(f"Request failed: {e}")
