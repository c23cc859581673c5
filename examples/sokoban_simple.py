"""
Sokoban Environment Simple Example

This script demonstrates basic usage of the Sokoban environment.
It connects to a running server, solves the first level with a mix of
direction presses and cell taps, and moves on to the next level.

Usage:
    uvicorn envs.sokoban_puzzle.server.app:app --port 8000
    python examples/sokoban_simple.py
"""

import sys
from pathlib import Path

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from envs.sokoban_puzzle import MoveAction, MoveToCellAction, SokobanClient


def print_board(observation):
    """Print a visual representation of the Sokoban board."""
    # Symbol mapping for visualization
    symbols = {
        '#': '█',  # Wall
        ' ': '·',  # Empty floor
        'B': '□',  # Box
        'T': '.',  # Goal
        '@': '@',  # Player
        'X': '▣',  # Box on goal
        'P': '+',  # Player on goal
    }

    width = observation.board_shape[1]
    print("\nCurrent Board:")
    print("─" * (width * 2))
    for row in observation.rows:
        print(' '.join(symbols[tile] for tile in row))
    print("─" * (width * 2))


def main():
    print("Sokoban Environment Example")
    print("=" * 50)

    client = SokobanClient(base_url="http://localhost:8000")

    try:
        print("\nLoading the first level...")
        obs = client.load_level(0)

        print(f"\nInitial State:")
        print(f"  Level: {obs.level_name}")
        print(f"  Board size: {obs.board_shape}")
        print(f"  Number of boxes: {obs.num_boxes}")
        print(f"  Player position: {obs.player_position}")
        print_board(obs)

        # "First Push": tap the box next to the player, then walk around
        moves = [
            MoveToCellAction(row=2, col=3),
            MoveToCellAction(row=1, col=1),
            MoveAction(direction="down"),
        ]

        for i, action in enumerate(moves, 1):
            print(f"\n--- Action {i}: {action} ---")
            result = client.step(action)
            obs = result.observation

            print(f"Moved: {result.moved}")
            print(f"Player position: {obs.player_position}")
            print(f"Boxes on goals: {obs.boxes_on_goals}/{obs.num_boxes}")
            print(f"Total moves: {obs.moves_count}")
            print_board(obs)

            if obs.completed:
                print("\n" + "=" * 50)
                print("Level Complete!")
                print(f"Completed in {obs.moves_count} moves")
                print("=" * 50)
                break

        if obs.completed and obs.has_next_level:
            client.next_level()
            obs = client.observation()
            print(f"\nNext up: {obs.level_name}")
            print_board(obs)

    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()

    finally:
        print("\nCleaning up...")
        client.close()
        print("Done!")


if __name__ == "__main__":
    main()
