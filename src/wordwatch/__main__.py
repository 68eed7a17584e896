"""Terminal front end for practicing a word list."""
import argparse
import json
import logging
import sys
import time
from typing import Optional, Sequence, TextIO

from wordwatch.config import ensure_directories, settings
from wordwatch.logging_config import setup_logging
from wordwatch.models.base import SessionLocal, init_db
from wordwatch.models.word_models import NavigationAction
from wordwatch.monitoring import start_monitoring
from wordwatch.services.practice_service import PracticeSession
from wordwatch.services.progress_service import ProgressService
from wordwatch.services.word_repository import load_words

logger = logging.getLogger(__name__)

COMMANDS = {
    "": NavigationAction.NEXT,
    "n": NavigationAction.NEXT,
    "p": NavigationAction.PREVIOUS,
    "f": NavigationAction.FAMILIAR,
    "d": NavigationAction.DETAILS,
}

HELP = "[enter/n] next  [p] previous  [f] familiar  [d] details  [q] quit"
EMPTY_LIST_MESSAGE = "No words to practice."


def render(session: PracticeSession, out: TextIO) -> None:
    """Print the card of the current word."""
    word = session.current_word
    if word is None:
        print(EMPTY_LIST_MESSAGE, file=out)
        return

    print("", file=out)
    print(f"  {word.text}", file=out)
    if word.phonetic:
        print(f"  {word.phonetic}", file=out)
    if session.details_expanded:
        if word.meaning:
            print(f"  {word.meaning}", file=out)
        if word.example:
            print(f"  {word.example}", file=out)
    progress = session.progress_for(word)
    if progress:
        print(f"  (familiar x{progress.familiar_count})", file=out)


def run(
    session: PracticeSession,
    stdin: TextIO = sys.stdin,
    out: TextIO = sys.stdout,
    feedback_delay: Optional[float] = None,
) -> None:
    """Read commands until 'q' or end of input."""
    if feedback_delay is None:
        feedback_delay = settings.practice.feedback_delay

    if session.is_empty:
        render(session, out)
        return

    print(HELP, file=out)
    render(session, out)
    for line in stdin:
        command = line.strip().lower()
        if command == "q":
            break
        action = COMMANDS.get(command)
        if action is None:
            print(HELP, file=out)
            continue

        if action == NavigationAction.FAMILIAR:
            record = session.mark_familiar()
            if record is not None:
                print(f"  ✓ familiar x{record.familiar_count}", file=out)
                time.sleep(feedback_delay)
        else:
            session.handle(action)
        render(session, out)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="wordwatch", description="Practice a vocabulary list.")
    parser.add_argument("--words", default=str(settings.paths.words_file), help="path to the JSON word list")
    parser.add_argument("--list", dest="list_name", default=settings.practice.word_list_name,
                        help="name progress is saved under")
    parser.add_argument("--no-persist", action="store_true", help="do not load or save progress")
    parser.add_argument("--reset", action="store_true", help="forget saved progress for the list first")
    parser.add_argument("--import", dest="import_path", metavar="PATH",
                        help="merge progress from a JSON file before practicing")
    parser.add_argument("--export", dest="export_path", metavar="PATH",
                        help="write saved progress of the list to a JSON file and exit")
    return parser.parse_args(argv)


def export_progress(progress_service: ProgressService, list_name: str, path: str) -> None:
    """Write the saved progress of a list to a JSON file."""
    data = progress_service.export_store(list_name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info(f"Exported {len(data)} progress records of {list_name!r} to {path}")


def import_progress(progress_service: ProgressService, list_name: str, path: str) -> None:
    """Merge progress from a JSON file into the saved progress of a list."""
    with open(path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    count = progress_service.import_store(list_name, data)
    logger.info(f"Imported {count} progress records into {list_name!r} from {path}")


def practice(args: argparse.Namespace) -> None:
    """Load the word list and run a session, with saved progress unless disabled."""
    words = load_words(args.words)
    persist = settings.practice.persist_progress and not args.no_persist

    if not persist:
        run(PracticeSession(words, list_name=args.list_name))
        return

    init_db()
    db = SessionLocal()
    try:
        progress_service = ProgressService(db)
        if args.reset:
            progress_service.reset(args.list_name)
        if args.import_path:
            import_progress(progress_service, args.list_name, args.import_path)
        if args.export_path:
            export_progress(progress_service, args.list_name, args.export_path)
            return
        session = PracticeSession.restore(words, args.list_name, progress_service)
        run(session)
    finally:
        db.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a practice session."""
    args = parse_args(argv)

    ensure_directories()
    setup_logging("Starting wordwatch ...")

    if settings.monitoring.port is not None:
        start_monitoring(settings.monitoring.port)
        logger.info(f"Metrics served on port {settings.monitoring.port}")

    try:
        practice(args)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
