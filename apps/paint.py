"""Paint garden - an empty garden, click or drag to plant blooms."""

from heartgarden import run

if __name__ == "__main__":
    run(seed_heart=False, title="Paint Garden")
