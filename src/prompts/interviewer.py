"""
Interviewer Prompt Patterns

Template pools the question generator draws from:
- Opening and closing prompts
- Technical, behavioral, system design and coding patterns
- Role contexts (skills and themes per role)
- Technologies, industries and scale contexts used to fill templates

Templates use ``${name}`` placeholders, filled by
``src.core.question_generator.interpolate``.
"""

from typing import NamedTuple


class RoleContext(NamedTuple):
    """Skills and recurring themes for one role."""

    skills: list[str]
    patterns: list[str]


DEFAULT_ROLE = "backend"


# ============================================================================
# OPENING / CLOSING
# ============================================================================

OPENING_PATTERNS: list[str] = [
    "Thanks for joining today! Can you tell me about yourself and your journey as a ${role}?",
    "It's great to meet you! Walk me through your background and what brought you to ${role}.",
    "Welcome! I'd love to hear about your most recent ${role} experience and what you enjoyed about it.",
    "Thanks for taking the time today. Tell me what excites you most about ${role} work.",
    "Let's start with your background. How did you get into ${role} and what's been your favorite project so far?",
    "Great to have you here! Can you walk me through your career path and key milestones as a ${role}?",
    "Welcome! Tell me about a recent ${skill} project you're proud of and why it was meaningful to you.",
    "Thanks for joining. What aspects of ${role} work do you find most rewarding?",
    "Let's begin with your story. How did you become interested in ${role} and where has that taken you?",
    "Great to meet you! Share your professional journey and what drives your passion for ${role}.",
]

CLOSING_PROMPTS: list[str] = [
    "We've covered a lot today! What questions do you have for me about the role or team?",
    "That wraps up my questions. What would you like to know about our company culture and this position?",
    "Thank you for your thoughtful answers. Is there anything else about your experience you'd like to highlight?",
    "Before we finish, what aspects of this role are most important to you in your next position?",
    "We're near the end. What questions can I answer for you about the team, tech stack, or growth opportunities?",
    "Thanks for your time today. What would make this role a great fit for your career goals?",
]


# ============================================================================
# QUESTION PATTERNS
# ============================================================================

TECHNICAL_PATTERNS: list[str] = [
    "How would you design ${system} to handle ${scale} with ${constraint}?",
    "Explain the trade-offs between ${option1} and ${option2} for ${context}.",
    "Walk through how you'd debug ${problem} in a ${tech} stack.",
    "What's your approach to ${challenge} at scale? Include ${metric}.",
    "Design a ${system} that handles ${requirement} and ${requirement2}.",
    "How do you ensure ${concern} in a ${architecture} system?",
    "Describe your strategy for ${task} across ${layers}.",
    "What would you optimize first in ${system} and why?",
    "Walk me through a production incident involving ${problem}. How did you fix it?",
    "Design ${feature} considering ${constraint1}, ${constraint2}, and ${constraint3}.",
]

# STAR-based
BEHAVIORAL_PATTERNS: list[str] = [
    "Tell me about a time you ${action} ${outcome}. What was your decision process?",
    "Describe when you had to ${challenge} on a team. How did you handle it?",
    "Walk me through a situation where you ${conflict} with ${stakeholder}. Resolution?",
    "Give me an example of when you ${growth}. What did you learn?",
    "Tell me about a time you ${mistake}. How did you recover?",
    "Describe a project where you ${impact}. What metrics prove it?",
    "When have you ${innovation}? What was the result?",
    "Tell me about a time you had to ${adapt}. How did you manage?",
    "Describe when you ${collaboration}. What was the outcome?",
    "Give me an example of when you ${leadership}. How did it go?",
]

BEHAVIORAL_ACTIONS: list[str] = [
    "led an initiative",
    "improved performance",
    "solved a hard problem",
    "handled a failure",
    "collaborated across teams",
    "mentored someone",
    "innovated",
]

SYSTEM_DESIGN_PATTERNS: list[str] = [
    "Design ${system} for ${usecase}. Start with API, data model, then scale.",
    "How would you build ${feature} to handle ${scale} without ${bottleneck}?",
    "Design a ${system} where ${constraint}. What are your key decisions?",
    "Build ${service} with ${requirement1}, ${requirement2}, and ${requirement3}.",
    "Design ${system} considering failure at ${layer}. How do you handle it?",
]

CODING_PATTERNS: list[str] = [
    "Implement ${algorithm} to solve ${problem}. Optimize for ${metric}.",
    "Code a ${structure} that handles ${constraint}. Include edge cases.",
    "Design an algorithm for ${problem} with ${complexity}. Explain tradeoffs.",
    "Implement ${pattern} for ${usecase}. Handle ${edgecase}.",
]

CODING_PROBLEMS: list[str] = ["search", "concurrency", "streaming", "caching", "detection", "balancing"]
CODING_METRICS: list[str] = ["time", "space", "throughput", "latency"]
CODING_LANGUAGES: list[str] = ["Python", "TypeScript", "Java", "Go", "C++", "Rust"]

MANAGERIAL_SCENARIOS: list[str] = [
    "handle underperformance",
    "build teams",
    "make decisions",
    "navigate conflict",
    "drive change",
]


# ============================================================================
# ROLE CONTEXTS
# ============================================================================

ROLE_CONTEXTS: dict[str, RoleContext] = {
    "frontend": RoleContext(
        skills=["React", "TypeScript", "Performance", "Accessibility", "Testing"],
        patterns=["rendering", "styling", "bundle size", "SEO", "interactions"],
    ),
    "backend": RoleContext(
        skills=["APIs", "Databases", "Caching", "Microservices", "Security"],
        patterns=["scaling", "consistency", "latency", "throughput", "reliability"],
    ),
    "full-stack": RoleContext(
        skills=["Architecture", "DevOps", "Database", "API Design", "Optimization"],
        patterns=["integration", "deployment", "monitoring", "security", "performance"],
    ),
    "data-scientist": RoleContext(
        skills=["ML Models", "Statistics", "Feature Engineering", "Python", "Experimentation"],
        patterns=["model selection", "bias", "validation", "metrics", "deployment"],
    ),
    "ml-engineer": RoleContext(
        skills=["Model Serving", "Pipelines", "Monitoring", "Optimization", "Infrastructure"],
        patterns=["inference", "latency", "A/B testing", "drift", "batch processing"],
    ),
    "devops": RoleContext(
        skills=["CI/CD", "Infrastructure", "Monitoring", "Incident Response", "Cost Optimization"],
        patterns=["deployment", "scaling", "reliability", "cost", "security"],
    ),
    "qa": RoleContext(
        skills=["Test Automation", "Strategy", "Performance Testing", "Security", "CI/CD"],
        patterns=["coverage", "regression", "reliability", "performance", "edge cases"],
    ),
    "security": RoleContext(
        skills=["Threat Modeling", "Secure Coding", "IAM", "Encryption", "Compliance"],
        patterns=["vulnerabilities", "authentication", "authorization", "data privacy"],
    ),
    "product": RoleContext(
        skills=["Prioritization", "Roadmaps", "Metrics", "User Research", "Stakeholder Management"],
        patterns=["strategy", "execution", "impact", "tradeoffs", "communication"],
    ),
    "manager": RoleContext(
        skills=["Hiring", "Performance", "Execution", "Coaching", "Conflict Resolution"],
        patterns=["delegation", "feedback", "growth", "accountability", "influence"],
    ),
}


# ============================================================================
# FILLERS
# ============================================================================

TECH_KEYWORDS: list[str] = [
    # Frontend
    "React", "Vue", "Angular", "TypeScript", "Next.js", "Webpack", "Redux", "TailwindCSS",
    # Backend
    "Node.js", "Python", "Java", "Go", "Express", "Django", "FastAPI", "Spring",
    # Databases
    "PostgreSQL", "MongoDB", "Redis", "MySQL", "Elasticsearch", "DynamoDB", "Cassandra",
    # Cloud
    "AWS", "GCP", "Azure", "Docker", "Kubernetes", "Terraform",
    # ML
    "TensorFlow", "PyTorch", "scikit-learn", "XGBoost",
    # DevOps
    "Jenkins", "GitLab", "Grafana", "Prometheus", "ELK", "DataDog",
]

INDUSTRIES: list[str] = [
    "E-commerce", "SaaS", "FinTech", "Healthcare", "EdTech", "Gaming", "Social Media",
    "Travel", "Marketplace", "Logistics", "Streaming", "Banking", "Insurance",
    "Real Estate", "HR Tech", "AdTech", "Blockchain", "IoT", "Robotics",
]

SCALE_CONTEXTS: list[str] = [
    "1M requests/day", "1B requests/day", "1M daily active users", "100M users",
    "100TB data", "1PB data", "p99 latency < 100ms", "99.9% uptime",
    "global distribution", "10x traffic spike", "real-time processing",
]


# ============================================================================
# ADVANCED SCENARIOS
# ============================================================================

# Placeholders: ${industry}, ${scale}, ${skill}
SCENARIO_TEMPLATES: dict[str, list[str]] = {
    "backend": [
        "Design a ${industry} platform serving ${scale} where you must handle consistency across multiple data centers.",
        "Build an API that processes ${scale} with p99 latency under 100ms. What's your approach to ${skill}?",
        "Your ${industry} service is experiencing 10x traffic spike. Debug and fix in production immediately.",
    ],
    "frontend": [
        "Optimize a ${industry} dashboard rendering ${scale} of data with 60fps requirement.",
        "Design a real-time collaboration feature for ${skill} handling ${scale} concurrent users.",
        "Your ${industry} app has 10x slower performance after ${skill} update. Root cause and solution?",
    ],
    "full-stack": [
        "Architect a complete ${industry} system from database to UI for ${scale}. Include ${skill}.",
        "Build a feature where ${skill} consistency matters across ${scale}. What trade-offs?",
        "Deploy a ${industry} service globally with ${scale}. How do you handle ${skill}?",
    ],
    "data-scientist": [
        "Build an ML model for ${industry} that predicts ${skill} at ${scale}. Validation strategy?",
        "Your model has 95% training accuracy but 60% in production. Debug and improve for ${scale}.",
        "Design experimentation framework for ${industry} with ${scale} users testing ${skill}.",
    ],
    "ml-engineer": [
        "Serve an ML model for ${industry} at ${scale} with sub-100ms latency. How?",
        "Build monitoring/alerting for model ${skill} in production across ${scale}.",
        "Deploy retraining pipeline for ${industry} model handling ${scale} data daily.",
    ],
    "devops": [
        "Design CI/CD for ${industry} platform ensuring ${scale} deployments with zero downtime.",
        "Architect observability for microservices handling ${scale} with focus on ${skill}.",
        "Incident: ${industry} service down. Debugging, recovery, and ${scale} prevention plan.",
    ],
}

DEEP_SCENARIO_SUFFIX = " With the constraint that you have limited ${skill} budget."


# ============================================================================
# QUALITY RULES
# ============================================================================

# Exam-style openers we never ask
GENERIC_PHRASES: list[str] = [
    "what is",
    "define",
    "explain the difference",
    "list the",
    "how many",
    "memorize",
]

# At least one of these must appear for a question to count as contextual
CONTEXTUAL_PHRASES: list[str] = [
    "design",
    "build",
    "handle",
    "implement",
    "tell me",
    "walk me",
]
