"""Heart garden - blooms planted along a heart curve, click to add more."""

from heartgarden import run

if __name__ == "__main__":
    run(seed_heart=True, title="Heart Garden")
