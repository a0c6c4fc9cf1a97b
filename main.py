import argparse
import json
import logging
import signal
import sys
import threading

from core.app_context import AppContext
from core.config_loader import load_config
from core.exceptions import MatchingCancelledError, MatchingError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Set on SIGINT/SIGTERM; the orchestrator abandons the run
cancel_event = threading.Event()


def signal_handler(sig, frame):
    logger.info("Shutdown signal received")
    cancel_event.set()


def print_results(results, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        print("No active jobs to match.")
        return

    for rank, result in enumerate(results, start=1):
        evidence = sorted(result.matched_certifications) + sorted(result.matched_skills)
        print(
            f"{rank:>3}. [{result.match_score:>3}] {result.job.title} @ {result.job.facility_name} "
            f"({result.job.id}) exp={'yes' if result.experience_match else 'no'} "
            f"by={result.scored_by} matched={', '.join(evidence) or '-'}"
        )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="NurseMatch - rank active jobs for a nurse profile")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument('--candidate-id', type=str,
                        help='Match for a candidate (user) id; may send a top-match notification')
    target.add_argument('--profile-id', type=str,
                        help='Admin view by profile id; never notifies')
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    parser.add_argument('--data', type=str, default=None,
                        help='YAML seed file for the in-memory stores (overrides data_file)')
    parser.add_argument('--no-notify', action='store_true',
                        help='Disable the top-match notification for this run')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')
    args = parser.parse_args(argv)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    config = load_config(args.config)
    if args.data:
        config.data_file = args.data
    if args.no_notify:
        config.notifications.enabled = False

    context = AppContext.build(config)
    service = context.matching_service

    try:
        if args.candidate_id:
            results = service.get_matches_for_candidate(args.candidate_id, cancel_event=cancel_event)
        else:
            results = service.get_matches_for_profile(args.profile_id, cancel_event=cancel_event)
    except MatchingCancelledError:
        logger.warning("Matching cancelled")
        return 130
    except MatchingError as e:
        logger.error(f"Matching failed: {e}")
        return 1
    finally:
        context.shutdown()

    print_results(results, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
