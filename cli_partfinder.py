"""Terminal client that reuses the in-process interpretation and offer logic."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from partfinder.classifier import classify, confidence_level, recommendations_for
from partfinder.data_files import get_mock_data
from partfinder.offers import enrich_and_rank, price_range, synthesize_offers

GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
RESET = "\033[0m"


def _confidence_color(confidence: float) -> str:
    if confidence >= 0.6:
        return GREEN
    if confidence >= 0.4:
        return YELLOW
    return RED


def interpret(description: str) -> None:
    suggestion = classify(description)
    color = _confidence_color(suggestion.confidence)
    label = f"{color}{suggestion.confidence:.2f} ({confidence_level(suggestion.confidence)}){RESET}"
    print(
        f"Description: {description} | part: {suggestion.id} {suggestion.name} | "
        f"category: {suggestion.category} | keywords: {suggestion.matchedKeywords} | confidence: {label}"
    )
    for line in recommendations_for(suggestion):
        print(f"  - {line}")


def show_offers(part_id: str) -> None:
    data = get_mock_data()
    offers = data.predefined_offers.get(part_id)
    if offers is None:
        offers = synthesize_offers(part_id, data.seller_pool)
    ranked = enrich_and_rank(offers, part_id)
    prices = price_range(ranked)
    if prices is None:
        print(f"Part: {part_id} | no sellers found")
        return
    print(f"Part: {part_id} | offers: {len(ranked)} | min={prices.min} max={prices.max} avg={prices.average}")
    for idx, offer in enumerate(ranked, start=1):
        print(
            f"  {idx:02d}. {offer.price:>5} TL | stock={offer.stock:<2} | {offer.name} ({offer.location}) | "
            f"{offer.deliveryTime} | {offer.warranty}"
        )


def interactive_shell() -> None:
    print("Interactive part interpreter. Type 'exit' to quit.")
    while True:
        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not text:
            continue
        if text.lower() in {"exit", "quit"}:
            return
        interpret(text)


def batch_mode(file_path: Path) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            text = line.strip()
            if not text:
                continue
            interpret(text)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the spare part finder")
    parser.add_argument("description", nargs="?", help="Fault description. If omitted, starts REPL mode.")
    parser.add_argument("--sellers", metavar="PART_ID", help="List seller offers for a part id")
    parser.add_argument("--batch", type=Path, help="File with descriptions to interpret line by line")
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.sellers:
        show_offers(args.sellers)
        return 0
    if args.batch:
        batch_mode(args.batch)
        return 0
    if args.description:
        interpret(args.description)
        return 0
    interactive_shell()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
