import argparse
import asyncio
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from models.errors import RoutingFailure
from models.routing import DEFAULT_MAX_TOKENS, MAX_MAX_TOKENS, MIN_MAX_TOKENS, RoutingRequest
from orchestrator.router import Router
from orchestrator.routing_types import BackendRole
from orchestrator.tier_decider import TierDecider

CREDENTIALS_BY_ROLE = {
    BackendRole.FAST: "GROQ_API_KEY",
    BackendRole.QUALITY: "OPENAI_API_KEY",
}


def required_credentials(quality: str) -> list[str]:
    """Credential names needed by every backend the tier's plan may call."""
    return [CREDENTIALS_BY_ROLE[role] for role in TierDecider().decide(quality).steps]


def format_outcome(outcome) -> str:
    header = f"[{outcome.backend_used} in {outcome.latency_ms} ms"
    if outcome.fallback_from:
        header += f", fell back from {outcome.fallback_from}: {outcome.primary_error_message}"
    return f"{header}]\n{outcome.answer}"


async def ask(router: Router, prompt: str, quality: str, max_tokens: int) -> int:
    """Route one prompt and print the result. Returns a process exit code."""
    request = RoutingRequest(prompt=prompt, quality_tier=quality, max_tokens=max_tokens)
    try:
        outcome = await router.route(request)
    except RoutingFailure as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    print(format_outcome(outcome))
    return 0


async def interactive(router: Router, quality: str, max_tokens: int) -> None:
    print("\n=== LLM Router ===")
    print("Type 'exit' to quit\n")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "You: ")).strip()
        except EOFError:
            print("\nExiting...")
            break

        if not user_input:
            continue
        if user_input.lower() in ("exit", "quit"):
            print("\nGoodbye!")
            break

        await ask(router, user_input, quality, max_tokens)
        print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Route a prompt to Groq or OpenAI by quality tier")
    parser.add_argument("prompt", nargs="?", help="Prompt to send; omit for interactive mode")
    parser.add_argument("--quality", choices=["free", "cheap", "best"], default="free")
    parser.add_argument("--max-tokens", type=int, default=DEFAULT_MAX_TOKENS)
    args = parser.parse_args(argv)

    if not MIN_MAX_TOKENS <= args.max_tokens <= MAX_MAX_TOKENS:
        parser.error(f"--max-tokens must be between {MIN_MAX_TOKENS} and {MAX_MAX_TOKENS}")

    config = Config()
    missing = config.validate(required_credentials(args.quality))
    if missing:
        print(f"Error: missing environment variables: {', '.join(missing)}", file=sys.stderr)
        return 2

    router = Router.from_config(config)

    if args.prompt is not None:
        if not args.prompt.strip():
            parser.error("prompt must not be empty")
        return asyncio.run(ask(router, args.prompt, args.quality, args.max_tokens))

    try:
        asyncio.run(interactive(router, args.quality, args.max_tokens))
    except KeyboardInterrupt:
        print("\nExiting...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
