#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                      THREEFISH EXPLORER LIVE DEMO                             ║
╚══════════════════════════════════════════════════════════════════════════════╝

This script walks through Threefish-256 in the console:
- Theory: structure of the cipher and the MIX function
- Example: the all-zero key/tweak/plaintext, round 0 in detail
- Demonstration: encrypt, step through the trace, decrypt back
- Audit log of every operation
"""

import sys

from src.explorer.session import ExplorerSession, Operation
from src.explorer.content import theory_text, build_zero_example
from src.integration.event_logger import create_event_logger
from src.core_crypto.threefish_key_schedule import ThreefishKeySchedule
from src.codec.hex_words import format_state, parse_key, parse_tweak


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    print(f"\n  [PAUSE] {message}")
    input()


def show_current(session):
    """Print the step under the session cursor"""
    step = session.current_step
    print(f"\n  {session.progress_label()}  (Round {step.round}, {step.kind.value})")
    print(f"  {step.description}")
    for word in format_state(step.state).split(' | '):
        print(f"    {word}")


def main():

    print("\n" * 2)
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 68 + "║")
    print("║" + "        THREEFISH CIPHER EXPLORER".center(68) + "║")
    print("║" + " " * 68 + "║")
    print("║" + "   A 256-bit block cipher, step by step".center(68) + "║")
    print("║" + " " * 68 + "║")
    print("╚" + "═" * 68 + "╝")

    pause("Press ENTER to begin the demonstration...")

    print_header("PART 1: THEORY")
    print()
    for line in theory_text().splitlines():
        print(f"  {line}")

    pause()

    print_header("PART 2: ALL-ZERO EXAMPLE")

    example = build_zero_example()
    print(f"\n  Key:        {example.key_hex}")
    print(f"  Tweak:      {example.tweak_hex}")
    print(f"  Plaintext:  {example.plaintext_hex}")
    print(f"  Ciphertext: {example.ciphertext_hex}")

    print_step("2.1", "Round 0 Operations")
    for heading, lines in example.round0:
        print(f"\n  {heading}")
        for line in lines:
            print(f"    {line}")

    pause()

    print_header("PART 3: DEMONSTRATION")

    event_logger = create_event_logger()
    key_hex = "1716151413121110" "1f1e1d1c1b1a1918" "2726252423222120" "2f2e2d2c2b2a2928"
    tweak_hex = "0706050403020100" "0f0e0d0c0b0a0908"
    plaintext_hex = "f8f9fafbfcfdfeff" "f0f1f2f3f4f5f6f7" "e8e9eaebecedeeef" "e0e1e2e3e4e5e6e7"

    print_step("3.1", "Key Schedule")
    schedule = ThreefishKeySchedule(parse_key(key_hex), parse_tweak(tweak_hex))
    print(f"\n  Parity word k4: {schedule.extended_key[4]:016x}")
    print(f"  Tweak word t2:  {schedule.extended_tweak[2]:016x}")
    for s in (0, 1, 18):
        print(f"  Subkey {s:2d}: {format_state(schedule.get_subkey(s))}")

    pause()

    print_step("3.2", "Encrypt")
    session = ExplorerSession(
        key_hex=key_hex,
        tweak_hex=tweak_hex,
        input_hex=plaintext_hex,
        operation=Operation.ENCRYPT,
        event_logger=event_logger,
    )
    ciphertext_hex = session.process()
    print(f"\n  Plaintext:  {plaintext_hex}")
    print(f"  Ciphertext: {ciphertext_hex}")
    print(f"  Recorded {session.step_count} steps")

    print_step("3.3", "Step Through the Trace (ENTER = next, p = previous, q = done)")
    show_current(session)
    while True:
        choice = input("\n  > ").strip().lower()
        if choice == 'q':
            break
        moved = session.prev_step() if choice == 'p' else session.next_step()
        if not moved:
            print("  (no more steps in that direction)")
            continue
        show_current(session)

    print_step("3.4", "Decrypt")
    session.operation = Operation.DECRYPT
    session.input_hex = ciphertext_hex
    recovered_hex = session.process()
    print(f"\n  Recovered:  {recovered_hex}")
    print(f"  Round trip: {'[OK]' if recovered_hex == plaintext_hex else '[X] MISMATCH'}")
    session.go_to(0)
    show_current(session)

    pause()

    print_step("3.5", "Rejected Input")
    session.key_hex = "not-a-key"
    try:
        session.process()
    except ValueError as e:
        print(f"\n  [X] {e}")

    pause()

    print_header("PART 4: AUDIT LOG")
    event_logger.print_audit_log()

    print("\n\n" + "═" * 70)
    print("  DEMONSTRATION COMPLETE!")
    print("═" * 70)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n  Cancelled.")
        sys.exit(1)
