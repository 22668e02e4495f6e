"""
Adaptive walkthrough: Profile → Recommendations → Prompt → Quizzes → Updated Standing

Demonstrates how a hosting application threads the engine through one course:
1. Load a stored profile and an older performance snapshot
2. Recommend topics
3. Build the course-generation prompt
4. Fold three quiz results into the performance snapshot
5. Show the adaptive status and the next recommendations
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import config, configure_logging
from src.engine import (
    AdaptiveStatus,
    apply_quiz_result,
    build_course_prompt,
    daily_reward,
    difficulty_change_hint,
    rank_modalities,
    recommend_topics,
)
from src.models import LearningProfile, PerformanceHistory, QuizResult, completion_ratio, xp_for_quiz
from src.utils import validate_learning_profile, validate_performance_history


def main():
    configure_logging("DEBUG")

    errors = config.validate()
    if errors:
        print("Configuration errors:", errors)
        return

    # ==================== Step 1: Load Snapshots ====================
    print("=" * 60)
    print("STEP 1: Loading Stored Snapshots")
    print("=" * 60)

    stored_profile = {
        "age": 11,
        "country": "Kenya",
        "gradeLevel": "Grade 6",
        "learningStyles": ["visual", "handson"],
        "interests": ["space", "animals"],
        "language": "English",
    }
    stored_performance = {
        "visualScore": 58,
        "readingScore": 50,
        "handsonScore": 44,
        "listeningScore": 50,
        "averageQuizScore": 71,
        "totalLessonsCompleted": 2,
        "currentDifficulty": "beginner",
        "strongTopics": ["volcanoes"],
        "weakTopics": [],
    }

    profile_result = validate_learning_profile(stored_profile)
    performance_result = validate_performance_history(stored_performance)
    print(f"Profile: {profile_result}")
    print(f"Performance: {performance_result}")
    for repair in performance_result.repairs:
        print(f"  - {repair}")

    profile = LearningProfile.from_dict(profile_result.data)
    performance = PerformanceHistory.from_dict(performance_result.data)
    print(f"\n✓ Modality ranking: {rank_modalities(profile, performance)}")
    print()

    # ==================== Step 2: Recommendations ====================
    print("=" * 60)
    print("STEP 2: Topic Recommendations")
    print("=" * 60)

    completed_courses = ["Black Holes"]
    for item in recommend_topics(profile, performance, completed_courses):
        print(f"  {item.icon} [{item.category}] {item.topic}: {item.reason}")
    print()

    # ==================== Step 3: Course Prompt ====================
    print("=" * 60)
    print("STEP 3: Course Prompt")
    print("=" * 60)

    prompt = build_course_prompt(profile, performance, "Mars Exploration")
    print(prompt[:600] + "...")
    print()

    # ==================== Step 4: Quizzes ====================
    print("=" * 60)
    print("STEP 4: Completing Lessons")
    print("=" * 60)

    lesson_ids = ["lesson_1", "lesson_2", "lesson_3", "lesson_4", "lesson_5"]
    completed_lessons = []
    streak = 4

    for lesson_id, score in zip(lesson_ids, [92, 88, 95]):
        completed_lessons.append(lesson_id)
        result = QuizResult(
            score=score,
            modality="visual",
            topic="Mars Exploration",
            streak=streak,
            completion_ratio=completion_ratio(completed_lessons, len(lesson_ids)),
        )
        previous = performance
        performance = apply_quiz_result(performance, result)

        print(f"\n📝 {lesson_id}: {score}% (+{xp_for_quiz(score)} XP)")
        print(f"  {difficulty_change_hint(previous, performance)}")
    print()

    # ==================== Step 5: Standing ====================
    print("=" * 60)
    print("STEP 5: Adaptive Status")
    print("=" * 60)

    status = AdaptiveStatus.from_performance(performance)
    for key, value in status.to_dict().items():
        print(f"  {key}: {value}")

    reward = daily_reward(streak)
    print(f"\n{reward.icon} Daily reward (day {reward.day}): {reward.xp} XP, {reward.gems} gems")

    print("\nNext recommendations:")
    for item in recommend_topics(profile, performance, completed_courses + ["Mars Exploration"]):
        print(f"  {item.icon} [{item.category}] {item.topic}")

    print("\n✓ Walkthrough complete")


if __name__ == "__main__":
    main()
