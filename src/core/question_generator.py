"""
Question Generator - Picks the next interview question for a candidate.

Questions are built from the template pools in ``src.prompts.interviewer``
and shaped by the candidate profile. An interview runs through four phases:

    OPENING → PROGRESSION → DEPTH → CLOSING

The opening builds rapport, progression alternates behavioral and
technical questions, depth escalates to system design or coding for
strong candidates, and closing hands the floor to the candidate.
"""

import logging
import math
import random
import re
from typing import Iterable, Sequence, TypeVar

from src.models.interview import InterviewPhase, Recommendation
from src.models.profile import CandidateProfile, ExperienceLevel
from src.models.question import InterviewQuestion, QuestionDifficulty, QuestionType
from src.prompts import interviewer as patterns
from src.prompts.interviewer import DEFAULT_ROLE, ROLE_CONTEXTS, RoleContext

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")

# Technical score above which candidates get the harder variants
DEEP_TECHNICAL_THRESHOLD = 70
DEEP_SYSTEM_DESIGN_THRESHOLD = 75

DEFAULT_QUESTION_BUDGET = 6


# ============================================================================
# HELPERS
# ============================================================================

def interpolate(template: str, variables: dict[str, str]) -> str:
    """
    Fill ``${name}`` placeholders.

    Every occurrence of a provided key is replaced; placeholders without
    a value are left as they are.
    """
    def _replace(match: re.Match) -> str:
        return variables.get(match.group(1), match.group(0))

    return _PLACEHOLDER.sub(_replace, template)


def role_key(role: str) -> str:
    """Normalize a free-text role into a role context key ("Full Stack" -> "full-stack")."""
    return re.sub(r"\s+", "-", role.strip().lower())


def get_role_context(role: str) -> RoleContext:
    """Role context for a free-text role, backend when unknown."""
    return ROLE_CONTEXTS.get(role_key(role), ROLE_CONTEXTS[DEFAULT_ROLE])


def determine_phase(question_count: int, total_budget: int = DEFAULT_QUESTION_BUDGET) -> InterviewPhase:
    """
    Map the number of questions already asked to an interview phase.

    With the default budget of 6: Q1 opening, Q2-Q4 progression,
    Q5 depth, Q6 closing.
    """
    if question_count == 0:
        return InterviewPhase.OPENING
    if question_count >= total_budget - 1:
        return InterviewPhase.CLOSING
    if question_count >= total_budget - 2:
        return InterviewPhase.DEPTH
    return InterviewPhase.PROGRESSION


def estimate_question_count(asked_topics: Sequence[str]) -> int:
    """Questions asked so far, estimated from covered topics (about two focuses per question)."""
    if not asked_topics:
        return 0
    return math.ceil(len(asked_topics) / 2)


def validate_question_quality(question: InterviewQuestion) -> bool:
    """
    Check that a question is contextual rather than exam-style.

    Rejects trivia openers such as "what is" or "define", then requires
    at least one scenario verb ("design", "walk me", ...).
    """
    prompt = question.prompt.lower()

    if any(phrase in prompt for phrase in patterns.GENERIC_PHRASES):
        return False

    return any(phrase in prompt for phrase in patterns.CONTEXTUAL_PHRASES)


# ============================================================================
# GENERATOR
# ============================================================================

class QuestionGenerator:
    """
    Builds interview questions from template pools.

    Randomness comes from an injectable ``random.Random`` so a seeded
    generator reproduces the same interview.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        question_budget: int = DEFAULT_QUESTION_BUDGET,
        max_attempts: int = 3,
    ):
        if question_budget < 3:
            raise ValueError("question_budget must leave room for opening, depth and closing")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.rng = rng or random.Random()
        self.question_budget = question_budget
        self.max_attempts = max_attempts

    def _pick(self, items: Sequence[T], default: T) -> T:
        if not items:
            return default
        return self.rng.choice(items)

    # =========================================================================
    # QUESTION BUILDERS
    # =========================================================================

    def opening_question(self, profile: CandidateProfile) -> InterviewQuestion:
        """Rapport-building first question."""
        role_context = get_role_context(profile.role)
        skill = self._pick(profile.resume_skills, None) or self._pick(role_context.skills, "your experience")
        pattern = self._pick(patterns.OPENING_PATTERNS, "Tell me about your background.")

        return InterviewQuestion(
            prompt=interpolate(pattern, {"role": profile.role, "skill": skill}),
            type=QuestionType.BEHAVIORAL,
            difficulty=QuestionDifficulty.INTRO,
            focuses=["rapport", "background"],
            context="Interview opening",
        )

    def technical_question(self, profile: CandidateProfile) -> InterviewQuestion:
        role_context = get_role_context(profile.role)
        skill = self._pick(role_context.skills, "your skill")
        pattern = self._pick(patterns.TECHNICAL_PATTERNS, "How would you approach ${skill}?")

        prompt = interpolate(pattern, {
            "skill": skill,
            "tech": self._pick(patterns.TECH_KEYWORDS, "your tech"),
            "scale": self._pick(patterns.SCALE_CONTEXTS, "scale"),
            "system": "a system",
            "constraint": "high reliability",
            "option1": "approach A",
            "option2": "approach B",
            "context": profile.role,
            "problem": "a production issue",
            "challenge": self._pick(role_context.patterns, "optimization"),
            "metric": "performance",
            "layers": "services",
            "feature": "a feature",
            "concern": self._pick(role_context.patterns, "consistency"),
            "architecture": "microservices",
            "task": "a task",
            "requirement": "scalability",
            "requirement2": "reliability",
            "constraint1": "latency",
            "constraint2": "cost",
            "constraint3": "reliability",
        })

        return InterviewQuestion(
            prompt=prompt,
            type=QuestionType.TECHNICAL,
            difficulty=self._score_difficulty(profile, DEEP_TECHNICAL_THRESHOLD),
            focuses=[skill],
            context=f"Technical depth for {profile.role}",
        )

    def behavioral_question(self, profile: CandidateProfile) -> InterviewQuestion:
        pattern = self._pick(patterns.BEHAVIORAL_PATTERNS, "Tell me about a time you ${action}.")

        prompt = interpolate(pattern, {
            "action": self._pick(patterns.BEHAVIORAL_ACTIONS, "achieved something"),
            "outcome": "and succeeded",
            "challenge": "push back on a decision",
            "stakeholder": "a stakeholder",
            "conflict": "disagreed",
            "growth": "pushed your limits",
            "mistake": "made a mistake",
            "impact": "had measurable impact",
            "innovation": "introduced a new approach",
            "adapt": "adapt to a sudden change",
            "collaboration": "collaborated across teams",
            "leadership": "led without authority",
        })

        return InterviewQuestion(
            prompt=prompt,
            type=QuestionType.BEHAVIORAL,
            difficulty=QuestionDifficulty.CORE,
            focuses=["judgment"],
            context="STAR structure",
        )

    def system_design_question(self, profile: CandidateProfile) -> InterviewQuestion:
        scale = self._pick(patterns.SCALE_CONTEXTS, "scale")
        industry = self._pick(patterns.INDUSTRIES, "your domain")
        pattern = self._pick(patterns.SYSTEM_DESIGN_PATTERNS, "Design a system.")

        prompt = interpolate(pattern, {
            "system": f"a {industry} system",
            "usecase": f"handling {scale}",
            "feature": "a feature",
            "service": "a service",
            "requirement1": "availability",
            "requirement2": "latency",
            "requirement3": "efficiency",
            "constraint": "data is distributed across regions",
            "layer": "the database",
            "requirement": "scale",
            "scale": scale,
            "bottleneck": "a database bottleneck",
        })

        return InterviewQuestion(
            prompt=prompt,
            type=QuestionType.SYSTEM_DESIGN,
            difficulty=self._score_difficulty(profile, DEEP_SYSTEM_DESIGN_THRESHOLD),
            focuses=["architecture"],
            context="System design with tradeoffs",
        )

    def coding_question(self, profile: CandidateProfile) -> InterviewQuestion:
        metric = self._pick(patterns.CODING_METRICS, "efficiency")
        complexity = "O(n)"
        pattern = self._pick(patterns.CODING_PATTERNS, "Implement a solution.")

        prompt = interpolate(pattern, {
            "algorithm": "an algorithm",
            "problem": self._pick(patterns.CODING_PROBLEMS, "problem"),
            "metric": metric,
            "structure": "data structure",
            "constraint": "concurrent access",
            "pattern": "a rate limiter",
            "usecase": "an API gateway",
            "edgecase": "failures",
            "complexity": complexity,
        })

        return InterviewQuestion(
            prompt=prompt,
            type=QuestionType.CODING,
            difficulty=self._score_difficulty(profile, DEEP_TECHNICAL_THRESHOLD),
            focuses=["problem solving"],
            context="Write working code",
            requires_coding=True,
            languages=list(patterns.CODING_LANGUAGES),
            constraints=[f"Target complexity: {complexity}", f"Optimize for {metric}"],
        )

    def managerial_question(self, profile: CandidateProfile | None = None) -> InterviewQuestion:
        scenario = self._pick(patterns.MANAGERIAL_SCENARIOS, "lead")

        return InterviewQuestion(
            prompt=f"How do you {scenario}? Walk me through a real example with metrics.",
            type=QuestionType.MANAGERIAL,
            difficulty=QuestionDifficulty.CORE,
            focuses=["leadership"],
            context="Leadership scenario",
        )

    def closing_question(self, profile: CandidateProfile | None = None) -> InterviewQuestion:
        """Professional wrap-up, the candidate's turn to ask."""
        prompt = self._pick(patterns.CLOSING_PROMPTS, "What questions do you have for me?")

        return InterviewQuestion(
            prompt=prompt,
            type=QuestionType.BEHAVIORAL,
            difficulty=QuestionDifficulty.CORE,
            focuses=["closing", "rapport"],
            context="Professional interview closure",
        )

    def advanced_scenario(self, profile: CandidateProfile, difficulty: QuestionDifficulty) -> str:
        """
        Realistic, role-specific scenario text.

        Deep scenarios add a budget constraint on the chosen skill.
        """
        key = role_key(profile.role)
        role_context = get_role_context(profile.role)
        variables = {
            "industry": self._pick(patterns.INDUSTRIES, "your industry"),
            "scale": self._pick(patterns.SCALE_CONTEXTS, "high scale"),
            "skill": self._pick(role_context.skills, "your expertise"),
        }

        templates = patterns.SCENARIO_TEMPLATES.get(key) or patterns.SCENARIO_TEMPLATES[DEFAULT_ROLE]
        scenario = self._pick(templates, "Design a system.")

        if difficulty == QuestionDifficulty.DEEP:
            scenario += patterns.DEEP_SCENARIO_SUFFIX

        return interpolate(scenario, variables)

    def build(self, question_type: QuestionType, profile: CandidateProfile) -> InterviewQuestion:
        """Build one question of the given type."""
        builders = {
            QuestionType.TECHNICAL: self.technical_question,
            QuestionType.BEHAVIORAL: self.behavioral_question,
            QuestionType.CODING: self.coding_question,
            QuestionType.SYSTEM_DESIGN: self.system_design_question,
            QuestionType.MANAGERIAL: self.managerial_question,
        }
        return builders[question_type](profile)

    @staticmethod
    def _score_difficulty(profile: CandidateProfile, threshold: int) -> QuestionDifficulty:
        if profile.technical_score > threshold:
            return QuestionDifficulty.DEEP
        return QuestionDifficulty.CORE

    # =========================================================================
    # INTERVIEW FLOW
    # =========================================================================

    def next_question_type(
        self,
        phase: InterviewPhase,
        question_count: int,
        profile: CandidateProfile,
        interview_types: Sequence[QuestionType],
    ) -> QuestionType:
        """
        Question type for a progression or depth slot.

        Progression alternates behavioral and technical; depth prefers
        system design for strong candidates, then coding.
        """
        allowed = set(interview_types)
        fallback = interview_types[0] if interview_types else QuestionType.TECHNICAL

        if phase == InterviewPhase.PROGRESSION:
            if question_count % 2 == 1 and QuestionType.BEHAVIORAL in allowed:
                return QuestionType.BEHAVIORAL
            if QuestionType.TECHNICAL in allowed:
                return QuestionType.TECHNICAL
            return fallback

        if phase == InterviewPhase.DEPTH:
            if profile.technical_score > DEEP_TECHNICAL_THRESHOLD and QuestionType.SYSTEM_DESIGN in allowed:
                return QuestionType.SYSTEM_DESIGN
            if QuestionType.CODING in allowed:
                return QuestionType.CODING
            if QuestionType.TECHNICAL in allowed:
                return QuestionType.TECHNICAL
            return fallback

        return QuestionType.TECHNICAL

    def phase_difficulty(self, phase: InterviewPhase, profile: CandidateProfile) -> QuestionDifficulty:
        """
        Difficulty for a phase.

        Depth questions go deep, except for freshers without a strong
        technical score, who stay at core.
        """
        if phase == InterviewPhase.OPENING:
            return QuestionDifficulty.INTRO
        if phase == InterviewPhase.DEPTH:
            if (
                profile.experience_level <= ExperienceLevel.FRESHER
                and profile.technical_score <= DEEP_TECHNICAL_THRESHOLD
            ):
                return QuestionDifficulty.CORE
            return QuestionDifficulty.DEEP
        return QuestionDifficulty.CORE

    def _is_repeat(self, question: InterviewQuestion, asked: set[str]) -> bool:
        return bool(question.focuses) and all(focus.lower() in asked for focus in question.focuses)

    def recommend_next_question(
        self,
        profile: CandidateProfile,
        interview_types: Iterable[QuestionType],
        asked_topics: Sequence[str],
        asked_question_count: int | None = None,
    ) -> Recommendation:
        """
        Recommend the next question.

        Args:
            profile: Candidate being interviewed
            interview_types: Question types the interview may use
            asked_topics: Focus tags already covered
            asked_question_count: Questions already asked; estimated from
                topics when omitted

        Returns:
            Recommendation whose ``question`` is None once the interview
            has used its whole budget
        """
        interview_types = list(interview_types)
        if asked_question_count is None:
            question_count = estimate_question_count(asked_topics)
        else:
            question_count = asked_question_count

        budget = self.question_budget

        if question_count >= budget:
            logger.info(f"Question budget exhausted ({question_count}/{budget}), interview complete")
            return Recommendation(question=None, phase=None, question_number=question_count, total_questions=budget)

        phase = determine_phase(question_count, budget)
        logger.info(f"Interview phase: {phase.value} (Q{question_count + 1}/{budget})")

        if phase == InterviewPhase.OPENING:
            question = self.opening_question(profile)
        elif phase == InterviewPhase.CLOSING:
            question = self.closing_question(profile)
        else:
            question = self._generate_checked(phase, question_count, profile, interview_types, asked_topics)

        return Recommendation(
            question=question,
            phase=phase,
            question_number=question_count + 1,
            total_questions=budget,
        )

    def _generate_checked(
        self,
        phase: InterviewPhase,
        question_count: int,
        profile: CandidateProfile,
        interview_types: list[QuestionType],
        asked_topics: Sequence[str],
    ) -> InterviewQuestion:
        question_type = self.next_question_type(phase, question_count, profile, interview_types)
        difficulty = self.phase_difficulty(phase, profile)
        asked = {topic.lower() for topic in asked_topics}

        logger.debug(f"{phase.value}: generating {question_type.value} question at {difficulty.value}")

        question = None
        for attempt in range(self.max_attempts):
            question = self.build(question_type, profile)

            if not validate_question_quality(question):
                logger.debug(f"Rejected generic question (attempt {attempt + 1}): '{question.prompt[:50]}'")
                continue

            if self._is_repeat(question, asked):
                logger.info(f"Focuses {question.focuses} already covered (attempt {attempt + 1}), regenerating")
                continue

            break
        else:
            logger.warning("No fresh question after all attempts, using last candidate")

        update = {"difficulty": difficulty}
        if phase == InterviewPhase.DEPTH and question_type in (QuestionType.TECHNICAL, QuestionType.SYSTEM_DESIGN):
            update["context"] = self.advanced_scenario(profile, difficulty)

        return question.model_copy(update=update)
