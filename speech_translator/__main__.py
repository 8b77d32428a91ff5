"""Translate a WAV file from the command line.

Usage:
    python -m speech_translator whatstheweatherlike.wav --from en-US --to de-DE
    python -m speech_translator in.wav --profile de --profiles-file profiles.yaml
    python -m speech_translator in.wav --from en-US --to de-DE --features TextToSpeech \
        --format audio/wav --output reply.wav
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from speech_translator.client import SpeechTranslatorClient
from speech_translator.errors import SpeechTranslatorError
from speech_translator.profiles import ProfileStore

logger = logging.getLogger("speech-translator")

# argparse dest -> API parameter name
_PARAM_FLAGS = {
    "source": "from",
    "target": "to",
    "features": "features",
    "voice": "voice",
    "format": "format",
    "profanity_action": "ProfanityAction",
    "profanity_marker": "ProfanityMarker",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="speech_translator", description="Translate a speech recording with the speech translation API"
    )
    parser.add_argument("file", help="WAV file to translate")
    parser.add_argument("--from", dest="source", help="Source language, e.g. en-US")
    parser.add_argument("--to", dest="target", help="Target language, e.g. de-DE")
    parser.add_argument("--features", help="Comma separated: TextToSpeech, Partial, TimingInfo")
    parser.add_argument("--voice", help="Voice for TextToSpeech")
    parser.add_argument("--format", help="audio/wav or audio/mp3")
    parser.add_argument("--profanity-action", help="NoAction, Marked or Deleted")
    parser.add_argument("--profanity-marker", help="Asterisk or Tag")
    parser.add_argument("--profile", help="Named parameter preset")
    parser.add_argument("--profiles-file", default="profiles.yaml", help="YAML/JSON file with presets")
    parser.add_argument("--endpoint", help="Service host (default from TRANSLATOR_ENDPOINT)")
    parser.add_argument("--api-key", help="Subscription key (default from TRANSLATOR_API_KEY)")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for the response, 0 waits forever")
    parser.add_argument("--output", help="Write binary responses to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def collect_parameters(args: argparse.Namespace) -> dict[str, str]:
    params: dict[str, str] = {}
    if args.profile:
        params.update(ProfileStore(args.profiles_file).get(args.profile))
    for dest, name in _PARAM_FLAGS.items():
        value = getattr(args, dest)
        if value:
            params[name] = value
    return params


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        params = collect_parameters(args)
    except KeyError:
        parser.error(f"unknown profile {args.profile!r} in {args.profiles_file}")
    except (ValueError, yaml.YAMLError) as e:
        parser.error(f"invalid profiles file {args.profiles_file}: {e}")
    try:
        client = SpeechTranslatorClient(api_key=args.api_key, endpoint=args.endpoint)
        response = client.translate_file(params, args.file, timeout=args.timeout)
    except SpeechTranslatorError as e:
        logger.error("Translation failed: %s", e)
        return 1

    if response.is_binary:
        if not args.output:
            logger.error("Received %d bytes of audio; pass --output to save it", len(response.payload))
            return 1
        Path(args.output).write_bytes(response.payload)  # type: ignore[arg-type]
        print(f"Wrote {args.output}")
    else:
        print(response.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
