"""
Benchmark
=========

Self-plays test mode sessions over many answers to measure solving strength.
"""

import logging
import time
from collections import Counter
from typing import Dict, Iterable, Optional

from .errors import SolverError
from .session import DEFAULT_MAX_GUESSES, SessionConfig, SessionState, start_session
from .words import WordList


log = logging.getLogger(__name__)


def benchmark(words: WordList, answers: Optional[Iterable[str]] = None,
              verbose: bool = True, **options) -> Dict:
    """
    Benchmark the solver on a list of answers.

    Args:
        words: word list the sessions play with
        answers: answers to test (default: every word)
        verbose: print progress
        **options: SessionConfig fields (max_guesses, first_guess, strategy, ...)

    Returns:
        Dict with results; failed games count as max_guesses + 1
    """
    answers = list(words if answers is None else answers)
    max_guesses = options.get("max_guesses", DEFAULT_MAX_GUESSES)

    results = []
    dist = Counter()
    failures = []

    start = time.time()
    for i, word in enumerate(answers):
        if verbose and i % 500 == 0:
            elapsed = time.time() - start
            rate = (i + 1) / elapsed if elapsed > 0 else 0
            avg = sum(results) / len(results) if results else 0
            print(f"[{i}/{len(answers)}] {rate:.1f} w/s, avg={avg:.4f}")

        try:
            session = start_session(SessionConfig(answer=word, **options), words)
            session.run()
        except SolverError as e:
            log.error(f"{word}: {e}")
            results.append(max_guesses + 1)
            failures.append(word)
            continue

        if session.state is SessionState.SOLVED:
            n = len(session.history)
            results.append(n)
            dist[n] += 1
        else:
            results.append(max_guesses + 1)
            failures.append(word)

    elapsed = time.time() - start

    return {
        'total': len(answers),
        'average': sum(results) / len(results) if results else 0.0,
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'time': elapsed,
        'rate': len(answers) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Pretty print benchmark results."""
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Words tested: {results['total']}")
    print(f"Average guesses: {results['average']:.4f}")
    total = results['total'] or 1
    print(f"Failures: {results['failures']} ({100*results['failures']/total:.2f}%)")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} words/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / total
        bar = "█" * int(pct / 2)
        print(f"  {n}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nFailed words: {results['failed_words']}")
    print("=" * 50)
