from __future__ import annotations

import argparse
import json
import os
import sys
import time

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from fractal_core.conditions import enumerate_single_level_states, states_to_json  # noqa: E402


def main() -> None:
    """
    Generates every reachable single-level board, grouped by condition, and
    writes them to a JSON file. Point FRACTAL_TTT_STATES at the output to make
    the dev tools load it instead of enumerating at startup.
    """
    ap = argparse.ArgumentParser(description='Generate bucketed single-level board states')
    ap.add_argument('--out', default=os.path.join('data', 'states.json'), help='Output JSON path')
    ap.add_argument('--indent', type=int, default=None, help='JSON indent (default: compact)')
    args = ap.parse_args()

    print('Generating board states...')
    t0 = time.time()
    table = enumerate_single_level_states()
    for condition, boards in table.items():
        print(f'  {condition.value:<10} {len(boards):>6}')

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    print('Writing to file...')
    with open(args.out, 'w', encoding='utf-8') as f:
        json.dump(states_to_json(table), f, indent=args.indent)
    print(f'Done in {time.time() - t0:.2f}s -> {args.out}')


if __name__ == '__main__':
    main()
