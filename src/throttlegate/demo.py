from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import typer

from throttlegate.core.interfaces import Decision
from throttlegate.core.throttle import FixedWindowThrottle, ThrottleConfigError

app = typer.Typer(help="Fixed-window throttle concurrency demo.")


def run_concurrent_checks(
    throttle: FixedWindowThrottle,
    identity: str,
    threads: int,
) -> list[Decision]:
    start = threading.Barrier(threads)

    def worker(_: int) -> Decision:
        start.wait()
        return throttle.check(identity)

    with ThreadPoolExecutor(max_workers=threads) as pool:
        return list(pool.map(worker, range(threads)))


@app.command()
def race(
    identity: str = typer.Option("user-A", help="Identity every thread checks."),
    threads: int = typer.Option(10, min=1, help="Number of simultaneous callers."),
    quota: int = typer.Option(3, help="Admissions per window."),
    window_sec: float = typer.Option(60.0, help="Window length in seconds."),
) -> None:
    try:
        throttle = FixedWindowThrottle(quota=quota, window_sec=window_sec)
    except ThrottleConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    decisions = run_concurrent_checks(throttle, identity, threads)
    for idx, decision in enumerate(decisions, start=1):
        verdict = "allowed" if decision.allowed else "denied"
        typer.echo(f"thread-{idx}: {verdict} remaining={decision.remaining}")

    admitted = sum(1 for d in decisions if d.allowed)
    typer.echo(f"admitted={admitted} denied={threads - admitted} quota={quota}")

    final = throttle.check(identity)
    typer.echo(f"follow-up: {'allowed' if final.allowed else 'denied'}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
