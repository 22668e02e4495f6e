"""
Prompt Assembler - renders the course-generation instruction for the content provider.

Pure text assembly: top-two modalities from the ranker, the difficulty
decision, and profile fields select canned fragments. The JSON shape in the
text is a contract with the provider; callers validate what comes back.
"""

from __future__ import annotations

from ..models.learning_profile import LearningProfile, Modality, PerformanceHistory
from .difficulty import next_difficulty
from .modality import rank_modalities

MODALITY_INSTRUCTIONS: dict[Modality, str] = {
    "visual": (
        "Include many diagrams described in text, visual metaphors, charts, and image "
        "descriptions. Use markdown image placeholders with descriptive alt texts. "
        "Format content with tables and structured layouts."
    ),
    "reading": (
        "Provide detailed written explanations, definitions, and note-style summaries. "
        "Include key takeaways and vocabulary lists. Use bullet points and numbered "
        "lists heavily."
    ),
    "handson": (
        "Include practical exercises, experiments, and hands-on activities within "
        "lessons. Add 'Try It Yourself' sections. Frame content as step-by-step projects."
    ),
    "listening": (
        "Write content in a conversational, narration-friendly tone. Include "
        "dialogue-style explanations and think-aloud walkthroughs. Keep sentences clear "
        "and spoken-word friendly."
    ),
}

# (max age inclusive, fragment); anything older uses ADULT_INSTRUCTIONS
AGE_INSTRUCTIONS = (
    (8, "Use very simple language, short sentences, fun analogies, and lots of emoji. Make it playful and game-like."),
    (12, "Use clear, engaging language with real-world examples they can relate to. Include fun facts and interesting connections."),
    (16, "Use slightly more advanced vocabulary. Include real-world applications, current events connections, and critical thinking prompts."),
)
ADULT_INSTRUCTIONS = "Use mature, academic language. Include in-depth analysis, research references, and complex problem-solving."

DIFFICULTY_HINTS = {
    "beginner": "keep it accessible",
    "intermediate": "balanced difficulty",
    "advanced": "challenge them",
}

COURSE_JSON_TEMPLATE = """{{
    "title": "Course Title",
    "description": "Brief engaging description",
    "learningObjectives": ["objective1", "objective2", "objective3"],
    "lessons": [
        {{
            "id": "lesson_1",
            "title": "Lesson Title",
            "content": "Full lesson content in markdown format...",
            "duration": 5,
            "contentType": "{primary}",
            "visualAssets": [
                {{
                    "type": "image",
                    "url": "https://example.com/asset.jpg",
                    "caption": "What this visual explains",
                    "altText": "Descriptive alt text for accessibility"
                }}
            ],
            "quiz": [
                {{
                    "question": "Question text?",
                    "options": ["A", "B", "C", "D"],
                    "correctAnswer": 0,
                    "explanation": "Why A is correct"
                }}
            ]
        }}
    ],
    "metadata": {{
        "difficulty": "{difficulty}",
        "targetAge": "{age}",
        "language": "{language}",
        "primaryModality": "{primary}",
        "gradeLevel": "{grade_level}"
    }}
}}"""


def language_instructions(profile: LearningProfile) -> str:
    text = f"Write the course in {profile.language}."
    if profile.language != "English" and profile.english_level:
        if profile.english_level == "beginner":
            text += (
                " The student is a beginner in English. Use simple English terms only when "
                "necessary for technical vocabulary, and provide the "
                f"{profile.language} translation in parentheses."
            )
        elif profile.english_level == "intermediate":
            text += (
                " The student has intermediate English. You may use common English terms "
                "but explain complex vocabulary."
            )
    return text


def age_instructions(profile: LearningProfile) -> str:
    text = f"The student is {profile.age} years old, in {profile.grade_level} ({profile.country})."
    fragment = next(
        (f for max_age, f in AGE_INSTRUCTIONS if profile.age <= max_age),
        ADULT_INSTRUCTIONS,
    )
    return f"{text} {fragment}"


def performance_context(performance: PerformanceHistory, difficulty: str) -> str:
    """Performance summary block; empty until the first lesson is completed."""
    if performance.total_lessons_completed <= 0:
        return ""

    lines = [
        "",
        "The student's current performance:",
        f"- Average quiz score: {performance.average_quiz_score}% "
        f"({DIFFICULTY_HINTS.get(difficulty, 'balanced difficulty')})",
        f"- Lessons completed: {performance.total_lessons_completed}",
        f"- Learner tier: {performance.learner_tier} (tier score {performance.tier_score})",
        f"- Streak health: {performance.streak_health}",
    ]
    if performance.strong_topics:
        lines.append(
            f"- Strong in: {', '.join(performance.strong_topics)}: you can reference "
            "these to build bridges to new concepts"
        )
    if performance.weak_topics:
        lines.append(
            f"- Needs improvement in: {', '.join(performance.weak_topics)}: include extra "
            "scaffolding for related concepts"
        )
    return "\n".join(lines)


def build_course_prompt(
    profile: LearningProfile,
    performance: PerformanceHistory,
    topic: str,
) -> str:
    """
    Assemble the adaptive course-generation instruction.

    Args:
        profile: Learner profile
        performance: Current performance snapshot
        topic: Requested course topic

    Returns:
        Instruction text for the generative content provider
    """
    ranking = rank_modalities(profile, performance)
    primary, secondary = ranking[0], ranking[1]
    difficulty = next_difficulty(performance)
    topic = (topic or "").strip()

    course_json = COURSE_JSON_TEMPLATE.format(
        primary=primary,
        difficulty=difficulty,
        age=profile.age,
        language=profile.language,
        grade_level=profile.grade_level,
    )

    return f"""You are an expert adaptive course creator for WML (WeMakeLessons). Generate a complete educational course tailored to this specific student.

STUDENT PROFILE:
{age_instructions(profile)}
{language_instructions(profile)}
{performance_context(performance, difficulty)}

CONTENT STYLE:
Primary modality: {primary}: {MODALITY_INSTRUCTIONS[primary]}
Secondary modality: {secondary}: {MODALITY_INSTRUCTIONS[secondary]}

COURSE TOPIC: "{topic}"
DIFFICULTY LEVEL: {difficulty}

REQUIREMENTS:
- Generate 4-6 lessons, each with 3-5 quiz questions
- Each lesson should primarily use {primary} modality with {secondary} as secondary
- Difficulty should match "{difficulty}" level calibrated for {profile.grade_level}
- Include engaging, age-appropriate examples
- Include visual learning support in every lesson with at least 2 visual assets (images, GIFs, or videos)
- Quiz questions should test understanding, not just memorization
- Include explanations for correct answers

IMPORTANT: Return ONLY valid JSON in this exact format, no markdown code blocks:
{course_json}"""
