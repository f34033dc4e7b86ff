"""
Run a batch of automated fair dice games, verify every transcript, save results and plot fairness charts.
Usage: python scripts/run_experiments.py --games 1000 --agent highest_mean --data-dir data
"""
import argparse
import datetime
import hashlib
import os
import random
from collections import Counter, defaultdict
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from fair_dice.agents import AGENT_MAP, make_agent
from fair_dice.core.config import COMPUTER_FIRST_PICKS, SECOND_PICKS, GameConfig
from fair_dice.core.engine import GameEngine
from fair_dice.core.errors import FairDiceError
from fair_dice.core.rules import COMPUTER_WINS, TIE, USER_WINS
from fair_dice.core.verify import verify_transcript
from fair_dice.persistence import csv_io, serializer
from fair_dice.persistence.recorder import InMemoryRecorder

DEFAULT_DICE = ["2,2,4,4,9,9", "6,8,1,1,8,6", "7,5,3,7,5,3"]


def generate_game_id(agent_name: str, timestamp: str) -> str:
    raw = f"{timestamp}_{agent_name}"
    return hashlib.sha256(raw.encode()).hexdigest()[:16]


def run_game(dice: List[str], cfg: GameConfig, agent_name: str, game_index: int, recorder: Optional[InMemoryRecorder] = None, rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    Play one automated game; the agent answers for the user when the user moves first.
    Returns:
        dict: summary row, transcript and verification problems.
    """
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    game_id = generate_game_id(agent_name, f"{timestamp}_{game_index}")
    if rng is None and cfg.rng_seed is not None:
        rng = random.Random(cfg.rng_seed)
    engine = GameEngine(dice, config=cfg, rng=rng)
    agent = make_agent(agent_name, rng)
    try:
        transcript = engine.play(agent.as_chooser(engine))
    except FairDiceError as e:
        if recorder is not None:
            recorder.drain(game_id, engine)
        row = {k: None for k in csv_io.get_summary_header()}
        row.update({"game_id": game_id, "game_index": game_index, "timestamp": timestamp,
                    "chooser": agent_name, "error": f"{type(e).__name__}: {e}"})
        return {"row": row, "transcript": None, "problems": [str(e)]}

    if recorder is not None:
        recorder.drain(game_id, engine)
    problems = verify_transcript(transcript)
    row = csv_io.summary_row(transcript, game_id, timestamp, chooser=agent_name,
                             game_index=game_index, verified=not problems)
    return {"row": row, "transcript": transcript, "problems": problems}


def face_frequencies(transcripts) -> Dict[int, Counter]:
    """Count how often each face index came up, per die index."""
    freq = defaultdict(Counter)
    for t in transcripts:
        for roll in (t.user_roll, t.computer_roll):
            freq[roll.die_index][roll.face_index] += 1
    return freq


def plot_results(outcomes: Counter, first_movers: Counter, freq: Dict[int, Counter], out_path: str):
    fig, (ax0, ax1, ax2) = plt.subplots(1, 3, figsize=(14, 4))

    labels = [USER_WINS, COMPUTER_WINS, TIE]
    bars = ax0.bar(labels, [outcomes.get(k, 0) for k in labels], color=['C0', 'C1', 'C7'])
    ax0.set_title('Outcomes')
    for rect in bars:
        ax0.text(rect.get_x() + rect.get_width() / 2.0, rect.get_height(), f"{int(rect.get_height())}", ha='center', va='bottom', fontsize=8)

    movers = ['USER', 'COMPUTER']
    ax1.bar(movers, [first_movers.get(m, 0) for m in movers], color='C2')
    ax1.set_title('First mover (coin flip)')

    width = 0.8 / max(1, len(freq))
    for offset, die_index in enumerate(sorted(freq)):
        xs = [i + offset * width for i in range(6)]
        ax2.bar(xs, [freq[die_index].get(i, 0) for i in range(6)], width=width, label=f"die {die_index}")
    ax2.set_xticks([i + 0.4 - width / 2 for i in range(6)])
    ax2.set_xticklabels([str(i) for i in range(6)])
    ax2.set_xlabel('Face index')
    ax2.set_title('Face frequency per die')
    ax2.legend(fontsize=8)

    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)


def run_experiments(dice: List[str], cfg: GameConfig, agent_name: str, number_of_games: int, data_dir: str) -> Dict[str, Any]:
    os.makedirs(data_dir, exist_ok=True)
    summary_csv = os.path.join(data_dir, 'game_summary.csv')
    events_json = os.path.join(data_dir, 'events.json')
    summary_json = os.path.join(data_dir, 'summary.json')
    chart_png = os.path.join(data_dir, 'fairness.png')

    recorder = InMemoryRecorder()
    # one shared stream, so a seeded run is reproducible without repeating the same game
    rng = random.Random(cfg.rng_seed) if cfg.rng_seed is not None else None
    rows = []
    transcripts = []
    outcomes = Counter()
    first_movers = Counter()
    errors = 0
    failed_verifications = 0

    for i in range(number_of_games):
        result = run_game(dice, cfg, agent_name, i, recorder, rng)
        rows.append(result["row"])
        t = result["transcript"]
        if t is None:
            errors += 1
            continue
        transcripts.append(t)
        outcomes[t.outcome] += 1
        first_movers[t.first_mover] += 1
        if result["problems"]:
            failed_verifications += 1

    csv_io.append_rows_to_csv(rows, summary_csv)
    serializer.save_json(recorder.events(), events_json)

    freq = face_frequencies(transcripts)
    summary = {
        "games": number_of_games,
        "agent": agent_name,
        "dice": dice,
        "config": cfg,
        "outcomes": dict(outcomes),
        "first_movers": dict(first_movers),
        "face_frequencies": {str(d): dict(c) for d, c in freq.items()},
        "errors": errors,
        "failed_verifications": failed_verifications,
    }
    serializer.save_json(summary, summary_json)
    plot_results(outcomes, first_movers, freq, chart_png)

    print(f"Game summaries saved to {summary_csv}")
    print(f"Events saved to {events_json}")
    print(f"Fairness chart: {chart_png}")
    return summary


def main():
    parser = argparse.ArgumentParser(description='Simulate provably fair dice games and check their fairness')
    parser.add_argument('--dice', nargs='+', default=DEFAULT_DICE, help='Dice as comma-separated faces (at least 3)')
    parser.add_argument('--agent', type=str, default='random', help=f'Chooser for the user side: {sorted(AGENT_MAP)}')
    parser.add_argument('--games', type=int, default=100, help='Number of games to play')
    parser.add_argument('--computer-first-pick', choices=COMPUTER_FIRST_PICKS, default='random')
    parser.add_argument('--second-pick', choices=SECOND_PICKS, default='offset')
    parser.add_argument('--seed', type=int, default=None, help='Seed rolls and picks for a reproducible run')
    parser.add_argument('--data-dir', type=str, default='data', help='Directory to save csv, json and charts')
    args = parser.parse_args()

    if args.agent not in AGENT_MAP:
        raise SystemExit(f"Unknown agent. Supported: {list(AGENT_MAP.keys())}")

    cfg = GameConfig(
        computer_first_pick=args.computer_first_pick,
        second_pick=args.second_pick,
        rng_seed=args.seed,
    )
    try:
        summary = run_experiments(args.dice, cfg, args.agent, args.games, args.data_dir)
    except FairDiceError as e:
        raise SystemExit(f"Error: {e}")
    print("All games finished. Summary:")
    print(serializer.dumps({k: v for k, v in summary.items() if k != "face_frequencies"}, indent=2))


if __name__ == "__main__":
    main()
