"""Static demo content seeded into a fresh instance.

Dependent records name their parent (``course_name`` / ``lesson_name``)
instead of carrying an id; the seeding engine resolves those names.
"""

from __future__ import annotations

from typing import Any

DEMO_COURSES: list[dict[str, Any]] = [
    {
        "name": "Mathematics 101",
        "slug": "math-101",
        "description": "Introduction to Algebra and Geometry",
        "category": "algebra",
        "difficulty": "beginner",
        "xp_reward": 100,
        "is_premium": False,
        "is_published": True,
        "order": 1,
    },
    {
        "name": "English Fundamentals",
        "slug": "english-101",
        "description": "Reading and writing skills",
        "category": "word-problems",
        "difficulty": "beginner",
        "xp_reward": 100,
        "is_premium": False,
        "is_published": True,
        "order": 2,
    },
    {
        "name": "Science Basics",
        "slug": "science-101",
        "description": "Physics and Chemistry fundamentals",
        "category": "arithmetic",
        "difficulty": "beginner",
        "xp_reward": 150,
        "is_premium": True,
        "price": 9.99,
        "is_published": True,
        "order": 3,
    },
    {
        "name": "Programming 101",
        "slug": "programming-101",
        "description": "Learn to code",
        "category": "geometry",
        "difficulty": "advanced",
        "xp_reward": 200,
        "is_premium": True,
        "price": 14.99,
        "is_published": True,
        "order": 4,
    },
]

DEMO_LESSONS: list[dict[str, Any]] = [
    {
        "name": "Introduction to Algebra",
        "slug": "intro-algebra",
        "description": "<h2>Algebra Basics</h2><p>Learn variables and equations</p>",
        "content": "<h2>Algebra Basics</h2><p>Learn variables and equations</p>",
        "video_url": "https://www.youtube.com/watch?v=xvFZjo5PgG0",
        "xp_reward": 50,
        "order": 1,
        "is_published": True,
        "is_free_preview": True,
        "course_name": "Mathematics 101",
    },
    {
        "name": "Solving Linear Equations",
        "slug": "linear-equations",
        "description": "<h2>Linear Equations</h2><p>Master equation solving</p>",
        "content": "<h2>Linear Equations</h2><p>Master equation solving</p>",
        "video_url": "https://example.com/linear.mp4",
        "xp_reward": 75,
        "order": 2,
        "is_published": True,
        "is_free_preview": False,
        "course_name": "Mathematics 101",
    },
]

DEMO_PROBLEMS: list[dict[str, Any]] = [
    {
        "type": "multiple_choice",
        "question": "What is 2x + 3 = 11? Solve for x.",
        "correct_answer": "4",
        "difficulty": "easy",
        "xp_reward": 25,
        "order": 1,
        "lesson_name": "Introduction to Algebra",
        "options": ["2", "3", "4", "5"],
    },
    {
        "type": "exact_answer",
        "question": "Solve: x - 5 = 10",
        "correct_answer": "15",
        "difficulty": "easy",
        "xp_reward": 30,
        "order": 2,
        "lesson_name": "Introduction to Algebra",
    },
]

DEMO_AI_PROMPTS: list[dict[str, Any]] = [
    {
        "name": "Lesson Generation",
        "slug": "lesson-generation",
        "category": "lesson_generation",
        "system_prompt": (
            "You are an expert educational content creator. Create engaging, clear "
            "lesson content for students. Focus on breaking down complex concepts "
            "into digestible pieces."
        ),
        "context": (
            "Used for generating lesson content with structured educational approach. "
            "Include learning objectives, key concepts, and real-world examples."
        ),
        "is_active": True,
    },
    {
        "name": "Problem Creator",
        "slug": "problem-creator",
        "category": "problem_creation",
        "system_prompt": (
            "You are an expert problem writer. Create problems that test understanding "
            "and encourage critical thinking. Provide clear, fair questions with "
            "multiple difficulty levels."
        ),
        "context": (
            "Used for generating problems for lessons. Include multiple choice, "
            "exact answer, and true/false formats."
        ),
        "is_active": True,
    },
    {
        "name": "Student Tutor",
        "slug": "student-tutor",
        "category": "student_assistance",
        "system_prompt": (
            "You are a patient, encouraging tutor. Help students understand concepts "
            "by asking guiding questions and providing hints rather than direct "
            "answers. Be supportive and clear."
        ),
        "context": "Used for providing student assistance. Never give direct answers in exam mode.",
        "is_active": True,
    },
]

DEMO_PAYLOADS: dict[str, list[dict[str, Any]]] = {
    "courses": DEMO_COURSES,
    "lessons": DEMO_LESSONS,
    "problems": DEMO_PROBLEMS,
    "ai_prompts": DEMO_AI_PROMPTS,
}
