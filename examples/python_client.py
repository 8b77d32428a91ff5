from speech_translator.client import SpeechTranslatorClient


if __name__ == "__main__":
    client = SpeechTranslatorClient(endpoint="dev.microsofttranslator.com")
    print("Client ready. Example translate call:")
    resp = client.translate_file(
        {"from": "en-US", "to": "de-DE", "features": "TextToSpeech", "format": "audio/wav"},
        "whatstheweatherlike.wav",
    )
    if resp.is_binary:
        with open("example_output.wav", "wb") as f:
            f.write(resp.payload)
        print("Wrote example_output.wav")
    else:
        print(resp.as_json())
