"""Generate a synthetic student results dataset.

Builds realistic-looking result documents (names, roll numbers, branches,
semesters with courses) using faker with a fixed seed, so the same
arguments always produce the same file. Useful for exercising the rank
aggregation job without real student data.

Usage:
    python scripts/generate_results.py -n 500
    python scripts/generate_results.py -n 100 --malformed 0.01 -o results.json
"""

import argparse
import json
import random
from pathlib import Path

from faker import Faker

DEFAULT_OUTPUT = Path(__file__).parent.parent / "data" / "results.json"

SEED = 20240801

BRANCHES = {
    "CSE": "Computer Science and Engineering",
    "ECE": "Electronics and Communication Engineering",
    "EE": "Electrical Engineering",
    "ME": "Mechanical Engineering",
    "CE": "Civil Engineering",
}
PROGRAMMES = ["B.Tech", "Dual Degree"]
BATCHES = [2021, 2022, 2023, 2024]
COURSES_PER_SEMESTER = 5


def make_semesters(rng: random.Random, branch: str, count: int) -> list[dict]:
    """Make ``count`` chronological semesters with a running CGPI."""
    semesters = []
    sgpi_sum = 0.0
    for number in range(1, count + 1):
        courses = []
        for i in range(COURSES_PER_SEMESTER):
            courses.append({
                "name": f"{branch} Course {number}{i + 1}",
                "code": f"{branch}-{number}{i + 1:02d}",
                "cgpi": rng.choice([4, 5, 6, 7, 8, 9, 10]),
            })
        sgpi = round(sum(c["cgpi"] for c in courses) / len(courses), 2)
        sgpi_sum += sgpi
        cgpi = round(sgpi_sum / number, 2)
        credits = 20 * COURSES_PER_SEMESTER
        semesters.append({
            "semester": number,
            "sgpi": sgpi,
            "cgpi": cgpi,
            "courses": courses,
            "sgpi_total": round(sgpi * credits),
            "cgpi_total": round(cgpi * credits * number),
        })
    return semesters


def fraction(value: str) -> float:
    """argparse type for a number between 0 and 1."""
    number = float(value)
    if not 0 <= number <= 1:
        raise argparse.ArgumentTypeError(f"{value} is not between 0 and 1")
    return number


def generate_results(count: int, seed: int = SEED, malformed: float = 0.0) -> list[dict]:
    """Generate ``count`` result documents.

    A ``malformed`` fraction of them (at least one when non-zero) is given
    no semesters at all, the way freshers appear before their first result.
    """
    fake = Faker(["en_IN", "en_US"])
    Faker.seed(seed)
    rng = random.Random(seed)

    num_malformed = 0
    if malformed > 0:
        num_malformed = min(count, max(1, round(count * malformed)))
    malformed_indexes = set(rng.sample(range(count), num_malformed)) if count else set()

    results = []
    for index in range(count):
        batch = rng.choice(BATCHES)
        branch = rng.choice(list(BRANCHES))
        semesters_done = max(1, min(8, (2025 - batch) * 2))
        gender = rng.choice(["male", "female"])
        name = fake.name_male() if gender == "male" else fake.name_female()
        results.append({
            "_id": f"{index + 1:024x}",
            "rollNo": f"{batch % 100}{branch}{index + 1:04d}",
            "name": name,
            "batch": batch,
            "branch": branch,
            "programme": rng.choice(PROGRAMMES),
            "gender": gender,
            "semesters": [] if index in malformed_indexes else make_semesters(rng, branch, semesters_done),
            "rank": {"college": 0, "batch": 0, "branch": 0, "class": 0},
        })
    return results


def main():
    parser = argparse.ArgumentParser(
        description="Generate a synthetic student results dataset")
    parser.add_argument("-n", "--count", type=int, default=200,
                        help="Number of student results (default: 200)")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    parser.add_argument("--malformed", type=fraction, default=0.0,
                        help="Fraction of results with no semesters (default: 0)")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    results = generate_results(args.count, args.seed, args.malformed)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(results, indent=2), encoding="utf-8")
    print(f"Written {len(results)} results to {output_path}")


if __name__ == "__main__":
    main()
