#!/usr/bin/env python3
"""
Interactive CLI demo for the FAQ bot.

Asks questions against the configured knowledge bank and shows which stage
answered. Use --csv to try it against a local spreadsheet export.
"""
import argparse
import sys

from dotenv import load_dotenv

# Imports assume PYTHONPATH=src is set or the package is installed
from faq_bot.app import FaqBotApp
from faq_bot.config import FaqBotConfig
from faq_bot.config_loader import load_config_from_env
from faq_bot.exceptions import FaqBotError, InvalidInputError


def print_banner():
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  FAQ Bot - Interactive CLI Demo")
    print("=" * 60)
    print("\nAsk a question. Type 'quit' or 'exit' to end the session.")
    print("Type ':refresh' to reload the knowledge bank.")
    print("-" * 60 + "\n")


def print_result(result, query):
    """Print formatted resolution result."""
    print(f"\n❓ Query: {query}")
    print(f"💬 Answer: {result.answer}")
    print(f"🔎 Source: {result.source.value}")

    if result.matched_question:
        print(f"📌 Matched: {result.matched_question}")

    if result.score is not None:
        direct = " (direct answer)" if result.direct_answer else ""
        print(f"📊 Score: {result.score:.3f}{direct}")

    print("-" * 60)


def build_config(args) -> FaqBotConfig:
    if args.csv:
        return FaqBotConfig(
            source="csv",
            faq_csv_path=args.csv,
            enable_semantic=False,
            warmup_on_start=True,
        )
    return load_config_from_env()


def main(argv=None):
    """Main CLI loop."""
    parser = argparse.ArgumentParser(description="Ask the FAQ bot questions")
    parser.add_argument("--csv", help="Use a local CSV export instead of the configured source")
    args = parser.parse_args(argv)

    load_dotenv()
    print_banner()

    try:
        bot = FaqBotApp(build_config(args))
        bot.initialize()
    except (FaqBotError, ValueError) as e:
        print(f"\n❌ Failed to initialize FAQ bot: {e}")
        print("Please check your environment variables and configuration.")
        return 1

    status = bot.status()
    print(f"✅ Ready! {status['entries']} entries loaded.\n")

    while True:
        try:
            query = input("You: ").strip()

            if not query:
                continue

            if query.lower() in ['quit', 'exit', 'q']:
                print("\n👋 Goodbye!\n")
                break

            try:
                if query == ":refresh":
                    print(f"🔄 Reloaded {bot.refresh()} entries")
                else:
                    print_result(bot.ask(query), query)
            except InvalidInputError as e:
                print(f"\n⚠️  {e}")
            except FaqBotError as e:
                print(f"\n❌ Error: {e}")
                print("-" * 60)

        except KeyboardInterrupt:
            print("\n\n👋 Interrupted. Goodbye!\n")
            break
        except EOFError:
            print("\n\n👋 Goodbye!\n")
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
