"""
Azure Speech - transcribe a WAV file and synthesize a reply.
Requires AZURE_SPEECH_KEY and AZURE_SPEECH_REGION.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import AzureSpeechClient

audio_path = sys.argv[1] if len(sys.argv) > 1 else "samples/hello.wav"

with AzureSpeechClient() as speech:
    recognition = speech.recognize_file(audio_path)
    if recognition.succeeded:
        print(f"Recognized: {recognition.text}")
    else:
        print(f"Nothing recognized ({recognition.status})")

    output = speech.synthesize_to_file("Thanks, your message was received.", "reply.wav")
    print(f"Reply written to {output}")
