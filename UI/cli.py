import argparse
import datetime
import hashlib
import os
import sys
from typing import List, Optional

from fair_dice.core.config import COMPUTER_FIRST_PICKS, SECOND_PICKS, GameConfig
from fair_dice.core.dice import Die, parse_die_spec
from fair_dice.core.engine import GameEngine
from fair_dice.core.errors import FairDiceError, InsufficientDice
from fair_dice.core.rules import COMPUTER_WINS, TIE, USER_WINS
from fair_dice.core.verify import verify_transcript
from fair_dice.persistence import csv_io, serializer
from fair_dice.persistence.recorder import InMemoryRecorder

OUTCOME_TEXT = {
    USER_WINS: "You win!",
    COMPUTER_WINS: "Computer wins!",
    TIE: "It's a tie!",
}


def parse_dice_args(values: List[str], min_dice: int = 3) -> List[Die]:
    """
    Parse the positional dice arguments, e.g. ["1,2,3,4,5,6", "2,2,4,4,9,9", "6,8,1,1,8,6"].
    Raises:
        InsufficientDice: If fewer than min_dice dice are given.
        InvalidDieSpec: If any die is malformed.
    """
    if len(values) < min_dice:
        raise InsufficientDice(
            f"You must provide at least {min_dice} dice, e.g.: python UI/cli.py 1,2,3,4,5,6 2,2,4,4,9,9 6,8,1,1,8,6"
        )
    return [parse_die_spec(v) for v in values]


def prompt_die_choice(low: int, high: int, dice=None) -> int:
    """
    Ask the human for a die index, re-asking until the answer is an integer in [low, high].
    """
    if dice is not None:
        print("Available dice:")
        for i, die in enumerate(dice):
            print(f"  {i}) {die}")
    while True:
        raw = input(f"Select your dice ({low}-{high}): ").strip()
        try:
            choice = int(raw)
        except ValueError:
            print("Please enter a valid integer.")
            continue
        if not (low <= choice <= high):
            print(f"Please choose a die between {low} and {high}.")
            continue
        return choice


def print_disclosure(event: dict) -> None:
    t = event.get("type")
    if t == "FirstMoveCommitted":
        print(f"First move HMAC: {event['digest']}")
    elif t == "DiceAssigned":
        print(f"First player selection: {event['first_mover']}")
        print(f"User selects Dice {event['user_die']}, Computer selects Dice {event['computer_die']}")
    elif t == "RollsCommitted":
        print(f"User roll HMAC: {event['user_digest']}")
        print(f"Computer roll HMAC: {event['computer_digest']}")
    elif t == "RollsRevealed":
        print(f"User roll: {event['user_roll']}, Computer roll: {event['computer_roll']}")
    elif t == "KeysRevealed":
        print(OUTCOME_TEXT.get(event["outcome"], event["outcome"]))
        print("\nRevealing Keys:")
        for label, key in event["keys"].items():
            print(f"{label} key: {key}")
    elif t == "GameAborted":
        print(f"Game aborted: {event['reason']}")


def play(dice: List[Die], config: GameConfig, data_dir: Optional[str] = None, chooser=None) -> int:
    """
    Play one game at the console, printing every disclosure as it happens.
    Args:
        dice (list[Die]): Validated dice.
        config (GameConfig): Game configuration.
        data_dir (str|None): If given, append a summary CSV row and save the JSON transcript there.
        chooser (callable|None): request_die_choice(low, high); defaults to the console prompt.
    Returns:
        int: Process exit code.
    """
    engine = GameEngine(dice, config=config)
    recorder = InMemoryRecorder()
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    game_id = hashlib.sha256(f"cli_{timestamp}_{os.getpid()}".encode()).hexdigest()[:16]
    if chooser is None:
        chooser = lambda low, high: prompt_die_choice(low, high, engine.state.dice)

    print("Welcome to the Provably Fair Dice Game!")
    steps = (
        engine.commit_first_move,
        lambda: engine.assign_dice(chooser),
        engine.commit_rolls,
        engine.reveal_rolls,
        engine.reveal_keys,
    )
    transcript = None
    try:
        for step in steps:
            transcript = step()
            for ev in recorder.drain(game_id, engine):
                print_disclosure({"type": ev.event_type, **ev.payload})
    except FairDiceError:
        for ev in recorder.drain(game_id, engine):
            print_disclosure({"type": ev.event_type, **ev.payload})
        raise

    problems = verify_transcript(transcript)
    if problems:
        print("Verification FAILED:")
        for p in problems:
            print(f"  - {p}")
    else:
        print(f"Verification: all digests match ({transcript.hash_name} HMAC).")

    if data_dir:
        os.makedirs(data_dir, exist_ok=True)
        summary_csv = os.path.join(data_dir, "game_summary.csv")
        row = csv_io.summary_row(transcript, game_id, timestamp, chooser="Human", verified=not problems)
        csv_io.append_row_to_csv(row, summary_csv)
        transcript_path = serializer.save_json(
            {"game_id": game_id, "transcript": transcript.to_dict(), "events": recorder.events()},
            os.path.join(data_dir, f"transcript_{game_id}.json"),
        )
        print(f"\n[Game summary saved to {summary_csv}]")
        print(f"[Transcript saved to {transcript_path}]")
    return 0 if not problems else 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fair-dice", description="Provably fair dice game against the computer")
    parser.add_argument("dice", nargs="*", help="Dice as comma-separated faces, e.g. 2,2,4,4,9,9 (at least 3)")
    parser.add_argument("--computer-first-pick", choices=COMPUTER_FIRST_PICKS, default="random",
                        help="How the computer picks when it moves first")
    parser.add_argument("--second-pick", choices=SECOND_PICKS, default="offset",
                        help="How the computer picks when the user moves first")
    parser.add_argument("--data-dir", default=None, help="Directory to save the summary CSV and transcript JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = GameConfig(computer_first_pick=args.computer_first_pick, second_pick=args.second_pick)
    try:
        dice = parse_dice_args(args.dice, min_dice=config.min_dice)
        return play(dice, config, data_dir=args.data_dir)
    except FairDiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nExiting.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
