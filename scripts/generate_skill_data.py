#!/usr/bin/env python3
"""
generate_skill_data.py - Pre-generate static lessons for one or more skills.

Writes data/<skill>.json skill-data documents that the app serves in place of
on-demand generation. Each document has one section per level, each holding
lessons 1..N.

Key features:
- Uses the same prompts and parser as the app
- Retries failed API calls with backoff
- Resume mode keeps lessons already present in the output file

Usage:
  python scripts/generate_skill_data.py --all                       # Every skill
  python scripts/generate_skill_data.py --skills grammar,reading
  python scripts/generate_skill_data.py --all --resume              # Fill gaps only
  python scripts/generate_skill_data.py --skills reading --lessons 2   # Quick test
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from englishai.classroom import LEVEL_UP_THRESHOLDS, SkillDataLoader
from englishai.config import DEFAULT_DATA_DIR, DEFAULT_MODEL, LESSONS_PER_LEVEL
from englishai.schemas import LEVELS, SKILLS, Level, SectionData, Skill, SkillData
from englishai.tutor import GeminiClient, GenerationError, LessonProvider, parse_lesson
from englishai.tutor.lessons import PROMPT_NAMES
from englishai.utils import missing_prompts

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Constants
DEFAULT_API_SLEEP = 1.0
DEFAULT_MAX_RETRIES = 3


def xp_required(level: Level) -> int:
    """XP a learner needs before a level opens (promotion threshold of the level below)."""
    index = LEVELS.index(level)
    if index == 0:
        return 0
    return LEVEL_UP_THRESHOLDS[LEVELS[index - 1]]


def empty_skill_data(skill: Skill) -> SkillData:
    sections = {
        level.value: SectionData(
            title=f"{skill.value.title()} - {level.value.title()}",
            description=f"{level.value.title()} {skill.value} lessons",
            xp_required=xp_required(level),
        )
        for level in LEVELS
    }
    return SkillData(**sections)


def load_existing(loader: SkillDataLoader, skill: Skill) -> SkillData:
    """Existing document for resume, or an empty one."""
    try:
        return loader.load_skill_data(skill)
    except FileNotFoundError:
        return empty_skill_data(skill)
    except ValueError as e:
        logger.warning(f"Ignoring unreadable skill data: {e}")
        return empty_skill_data(skill)


def save_skill_data(skill_data: SkillData, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(skill_data.model_dump_json(indent=2))
    logger.info(f"Saved {path}")


def generate_skill(
    skill: Skill,
    provider: LessonProvider,
    client: GeminiClient,
    loader: SkillDataLoader,
    lessons_per_level: int,
    resume: bool,
    max_retries: int,
) -> tuple[int, list[str]]:
    """
    Generate every missing lesson for a skill and write its document.

    Returns:
        (number generated, list of failed lesson ids)
    """
    skill_data = load_existing(loader, skill) if resume else empty_skill_data(skill)
    generated = 0
    failed = []

    for level in LEVELS:
        section = skill_data.section(level.value)
        existing = {lesson.id for lesson in section.lessons}

        for n in range(1, lessons_per_level + 1):
            lesson_id = f"{skill.value}-{level.value}-{n}"
            if lesson_id in existing:
                logger.info(f"  Skipping {lesson_id} (already generated)")
                continue

            logger.info(f"  Generating {lesson_id}...")
            prompt = provider.build_prompt(skill, level, n)
            try:
                response_text = client.generate(prompt, max_retries=max_retries)
                lesson = parse_lesson(skill, level, n, response_text)
            except GenerationError as e:
                logger.error(f"  ✗ {lesson_id}: {e}")
                failed.append(lesson_id)
                continue
            except Exception as e:
                logger.error(f"  ✗ API error for {lesson_id}: {e}")
                failed.append(lesson_id)
                continue

            section.lessons.append(lesson)
            generated += 1
            logger.info(f"  ✓ {lesson.title} ({len(lesson.assignments)} assignments)")
            time.sleep(client.sleep_seconds)

        section.lessons.sort(key=lambda lesson: int(lesson.id.rsplit("-", 1)[1]))

    save_skill_data(skill_data, loader.skill_path(skill))
    return generated, failed


def main():
    parser = argparse.ArgumentParser(
        description="Pre-generate static skill-data documents",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help="Directory for <skill>.json files"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Generate every skill"
    )
    parser.add_argument(
        "--skills",
        type=str,
        help="Comma-separated list of skills to generate"
    )
    parser.add_argument(
        "--lessons",
        type=int,
        default=LESSONS_PER_LEVEL,
        help=f"Lessons per level (default: {LESSONS_PER_LEVEL})"
    )
    parser.add_argument(
        "--model",
        type=str,
        default=DEFAULT_MODEL,
        help=f"Gemini model to use (default: {DEFAULT_MODEL})"
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Keep lessons already present in the output files"
    )
    parser.add_argument(
        "--api-sleep",
        type=float,
        default=DEFAULT_API_SLEEP,
        help=f"Sleep between API calls (default: {DEFAULT_API_SLEEP}s)"
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        help=f"Attempts per lesson (default: {DEFAULT_MAX_RETRIES})"
    )

    args = parser.parse_args()

    if not args.all and not args.skills:
        parser.error("Must specify --all or --skills")

    if args.skills:
        try:
            skills = [Skill(s.strip()) for s in args.skills.split(",")]
        except ValueError as e:
            parser.error(str(e))
    else:
        skills = SKILLS

    missing = missing_prompts(PROMPT_NAMES[skill] for skill in skills)
    if missing:
        parser.error(f"Missing prompt templates: {', '.join(missing)}")

    client = GeminiClient(model=args.model, sleep_seconds=args.api_sleep)
    provider = LessonProvider(client)
    loader = SkillDataLoader(args.output_dir)

    total_generated = 0
    all_failed = []

    for skill in skills:
        logger.info(f"Skill: {skill.value}")
        try:
            generated, failed = generate_skill(
                skill,
                provider,
                client,
                loader,
                lessons_per_level=args.lessons,
                resume=args.resume,
                max_retries=args.max_retries,
            )
        except KeyboardInterrupt:
            logger.info("\nInterrupted by user. Re-run with --resume to continue.")
            break
        total_generated += generated
        all_failed.extend(failed)

    # Summary
    logger.info("\n" + "=" * 50)
    logger.info("SUMMARY")
    logger.info("=" * 50)
    logger.info(f"Generated: {total_generated}")
    logger.info(f"Failed: {len(all_failed)}")
    if all_failed:
        logger.info(f"Failed lessons: {', '.join(all_failed)}")


if __name__ == "__main__":
    main()
