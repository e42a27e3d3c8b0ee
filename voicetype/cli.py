"""Command-line interface for voicetype."""
import argparse
import json
import logging
import sys
from pathlib import Path

from .analyzer import VoiceTypeAnalyzer
from .feedback import NICHE_OPTIONS, ExperienceLevel, build_feedback
from .profiles import get_profile
from .types import Archetype


def _read_file(path_str):
    path = Path(path_str)
    if not path.exists():
        print(f"Error: File not found: {path_str}", file=sys.stderr)
        sys.exit(1)
    return path, path.read_bytes()


def analyze_command(args):
    """Analyze a recording command."""
    analyzer = VoiceTypeAnalyzer(max_workers=getattr(args, "workers", 1))
    content_path, content = _read_file(args.file)

    result = analyzer.analyze_wav(content)

    if args.json:
        payload = {
            "valid": bool(result.outcome and result.outcome.is_valid),
            "reason": result.outcome.reason.value if result.outcome else None,
            "message": result.outcome.message if result.outcome else None,
            "voice_type": result.archetype.value if result.archetype else None,
            "error": result.error,
        }
        if result.classification is not None:
            payload["scores"] = {
                a.value: s for a, s in result.classification.scores.items()
            }
        if result.features is not None:
            payload["features"] = result.features.to_dict()
        print(json.dumps(payload, indent=2))
    else:
        print(f"\n{'='*60}")
        print("  Voice Type Report")
        print(f"{'='*60}\n")
        print(f"File: {content_path.resolve()}")

        if result.error:
            print(f"Error: {result.error}")
        elif not result.outcome.is_valid:
            print(f"Rejected: {result.outcome.reason.value.upper()}")
            print(f"  {result.outcome.message}")
        else:
            profile = get_profile(result.archetype)
            print(f"Voice type: {profile.icon} {profile.name}")
            print(f"\n{profile.description}")

            print("\nScores:")
            for archetype, score in result.classification.scores.items():
                marker = "→" if archetype is result.archetype else " "
                print(f"  {marker} {archetype.value}: {score}")

            if args.verbose:
                f = result.features
                print("\nFeatures:")
                print(f"  • Spectral centroid: {f.spectral_centroid:.0f} Hz")
                print(f"  • Zero-crossing rate: {f.zero_crossing_rate:.3f}")
                print(f"  • RMS energy: {f.rms_energy:.4f}")
                print(f"  • Pitch: {f.pitch:.1f} Hz")
                print(f"  • Pace: {f.pace.wpm:.0f} wpm (speech {f.pace.speech_ratio:.0%})")
                print(f"  • Dynamic range: {f.dynamic_range:.2f}")

        print(f"\n{'='*60}\n")

    sys.exit(0 if result.succeeded else 1)


def profile_command(args):
    """Show archetype profile command."""
    try:
        profile = get_profile(args.type)
    except ValueError:
        valid = ", ".join(a.value for a in Archetype)
        print(f"Error: Unknown voice type: {args.type} (expected one of: {valid})", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(profile.to_dict(), indent=2, ensure_ascii=False))
        return

    print(f"\n{profile.icon} {profile.name}\n")
    print(profile.description)
    print("\nStrengths:")
    for s in profile.strengths:
        print(f"  • {s}")
    print("\nBest for:")
    for niche in profile.best_for:
        print(f"  • {niche}")
    print(f"\nTip: {profile.tips}\n")


def feedback_command(args):
    """Build a feedback record for a recording command."""
    analyzer = VoiceTypeAnalyzer(max_workers=getattr(args, "workers", 1))
    _, content = _read_file(args.file)

    result = analyzer.analyze_wav(content)
    if not result.succeeded:
        reason = result.error or result.outcome.message
        print(f"Error: Recording could not be classified: {reason}", file=sys.stderr)
        sys.exit(1)

    record = build_feedback(
        result.archetype,
        args.niche,
        result.features,
        experience_level=args.experience,
    )
    output = json.dumps(record.to_dict(), indent=2)

    if args.output:
        Path(args.output).write_text(output)
        print(f"\n✓ Feedback record saved to: {Path(args.output).resolve()}")
        print(f"Predicted type: {record.predicted_type.value}")
        print(f"Niches: {', '.join(record.actual_niches)}")
    else:
        print(output)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="voicetype",
        description="Classify a speech recording into a voice-acting archetype"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a WAV recording")
    analyze_parser.add_argument("file", help="WAV file to analyze")
    analyze_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    analyze_parser.add_argument("-v", "--verbose", action="store_true", help="Show features and debug logging")
    analyze_parser.add_argument("-w", "--workers", type=int, default=1, help="Number of parallel threads for feature extraction (default: 1)")
    analyze_parser.set_defaults(func=analyze_command)

    # Profile command
    profile_parser = subparsers.add_parser("profile", help="Describe a voice type")
    profile_parser.add_argument("type", help="Voice type label, e.g. storyteller")
    profile_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    profile_parser.set_defaults(func=profile_command)

    # Feedback command
    feedback_parser = subparsers.add_parser("feedback", help="Record the niches you work in for a recording")
    feedback_parser.add_argument("file", help="WAV file that was analyzed")
    feedback_parser.add_argument("-n", "--niche", nargs="+", required=True,
                                 choices=sorted(NICHE_OPTIONS), help="Niches you work in")
    feedback_parser.add_argument("-e", "--experience", choices=[e.value for e in ExperienceLevel],
                                 default=ExperienceLevel.NOT_SPECIFIED.value, help="Experience level")
    feedback_parser.add_argument("-o", "--output", help="Output file path")
    feedback_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    feedback_parser.set_defaults(func=feedback_command)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
