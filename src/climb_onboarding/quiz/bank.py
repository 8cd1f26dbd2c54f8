"""
Onboarding question bank

Twelve questions in four blocks (A-D, three steps each). Step 1 of every
block has a fixed option list; steps 2 and 3 narrow their options based
on earlier answers via the branch tables below. Branch tables are kept
per question so that the same answer value (e.g. "daily") can select
different lists in different questions.
"""

from typing import Union

from .schema import (
    BlockId,
    Dependency,
    NoveltyLevel,
    Question,
    QuestionId,
    QuestionNotFoundError,
    QuestionOption,
)


def _options(data_key: str, *entries) -> tuple:
    """
    Build an option tuple.

    Each entry is (id, label) when the stored value equals the id, or
    (id, label, value) otherwise.
    """
    result = []
    for entry in entries:
        if len(entry) == 2:
            option_id, label = entry
            value = option_id
        else:
            option_id, label, value = entry
        result.append(QuestionOption(id=option_id, label=label, value=value, data_key=data_key))
    return tuple(result)


# Block A: goal image

A1 = Question(
    id=QuestionId.A1,
    prompt="What kind of goal are you working toward?",
    options=_options(
        "goal_focus",
        ("knowledge", "Understand a subject deeply"),
        ("skill", "Be able to do something"),
        ("outcome", "Achieve a concrete result"),
        ("habit", "Build a steady habit"),
    ),
)

A2 = Question(
    id=QuestionId.A2,
    prompt="What would tell you that you got there?",
    options=(
        QuestionOption("general_improvement", "General improvement", "general_improvement", "goal_evidence"),
        QuestionOption("specific_skill", "A specific skill I can use", "specific_skill", "domain_scenes"),
        QuestionOption("consistent_practice", "Practising consistently", "consistent_practice", "habit_target"),
        QuestionOption("measurable_progress", "Progress I can measure", "measurable_progress", "evidence_hint"),
    ),
    depends_on=Dependency.single("goal_focus", QuestionId.A1),
)

A3 = Question(
    id=QuestionId.A3,
    prompt="How wide should your study range be?",
    options=_options(
        "scope_style",
        ("broad", "Cover the whole field broadly"),
        ("prioritized", "Focus on the most important parts"),
        ("deep", "Go deep on one area"),
        ("undecided", "Not sure yet"),
    ),
    depends_on=Dependency.first_of(
        ("goal_evidence", "domain_scenes", "habit_target", "evidence_hint"), QuestionId.A2
    ),
)

# Block B: path and load

B1 = Question(
    id=QuestionId.B1,
    prompt="How much new material versus review do you want?",
    options=_options(
        "novelty_preference",
        ("new_heavy", "Mostly new material", NoveltyLevel.NEW_HEAVY.ratio),
        ("new_some", "Somewhat more new material", NoveltyLevel.NEW_SOME.ratio),
        ("repeat_some", "Somewhat more review", NoveltyLevel.REPEAT_SOME.ratio),
        ("repeat_heavy", "Mostly review", NoveltyLevel.REPEAT_HEAVY.ratio),
    ),
)

B2 = Question(
    id=QuestionId.B2,
    prompt="How often do you want to review?",
    options=_options(
        "review_cadence",
        ("daily", "Every day"),
        ("every_other_day", "Every other day"),
        ("weekly", "Once a week"),
        ("milestone", "At each milestone"),
    ),
    depends_on=Dependency.single("novelty_preference", QuestionId.B1),
)

B3 = Question(
    id=QuestionId.B3,
    prompt="How challenging should your tasks be?",
    options=_options(
        "difficulty_bias",
        ("easy", "On the easy side", -0.1),
        ("normal", "Normal", 0),
        ("challenge_some", "A bit challenging", 0.1),
        ("challenge_much", "Very challenging", 0.2),
    ),
    depends_on=Dependency.single("review_cadence", QuestionId.B2),
)

# Block C: evidence and finish

C1 = Question(
    id=QuestionId.C1,
    prompt="What evidence of achievement do you want to end up with?",
    options=_options(
        "goal_evidence",
        ("credential_score", "A credential or score"),
        ("portfolio_demo", "A portfolio or demo"),
        ("realworld_result", "A real-world result"),
        ("presentation_review", "A presentation or expert review"),
    ),
)

C2 = Question(
    id=QuestionId.C2,
    prompt="What target would make that evidence concrete?",
    options=_options(
        "kpi_shape",
        ("kpi_1", "One clear number"),
        ("kpi_2", "Two numbers to track"),
        ("kpi_quality", "A quality bar"),
        ("kpi_flexible", "Keep it flexible"),
    ),
    depends_on=Dependency.single("goal_evidence", QuestionId.C1),
)

C3 = Question(
    id=QuestionId.C3,
    prompt="How do you want to finish?",
    options=_options(
        "capstone_type",
        ("test", "Take a test"),
        ("demo", "Give a demo"),
        ("production", "Ship something real"),
        ("presentation", "Give a presentation"),
    ),
    depends_on=Dependency.single("kpi_shape", QuestionId.C2),
)

# Block D: dropoff and recovery

D1 = Question(
    id=QuestionId.D1,
    prompt="What usually makes you stop?",
    options=_options(
        "dropoff_type",
        ("time", "Running out of time"),
        ("difficulty", "It gets too hard"),
        ("focus", "Losing focus"),
        ("meaning", "Losing sight of why"),
    ),
)

D2 = Question(
    id=QuestionId.D2,
    prompt="What typically triggers it?",
    options=_options(
        "dropoff_trigger",
        ("fatigue", "Being tired"),
        ("schedule_slip", "The schedule slipping"),
        ("notification_noise", "Notifications and interruptions"),
        ("task_too_long", "Tasks that are too long"),
    ),
    depends_on=Dependency.single("dropoff_type", QuestionId.D1),
)

D3 = Question(
    id=QuestionId.D3,
    prompt="When that happens, what should we do?",
    options=_options(
        "fallback_strategy",
        ("micro_switch", "Switch to a tiny task"),
        ("defer", "Push it to tomorrow"),
        ("substitute", "Swap in an easier task"),
        ("announce", "Tell someone"),
    ),
    depends_on=Dependency.compound(
        "dropoff_type", "dropoff_trigger", (QuestionId.D1, QuestionId.D2)
    ),
)


QUESTIONS = {q.id: q for q in (A1, A2, A3, B1, B2, B3, C1, C2, C3, D1, D2, D3)}

# Flow order for navigation
QUESTION_ORDER = list(QuestionId)

BLOCK_TITLES = {
    BlockId.A: "Goal image",
    BlockId.B: "Path and load",
    BlockId.C: "Evidence and finish",
    BlockId.D: "Dropoff and recovery",
}

STEPS_PER_BLOCK = 3


# Branch tables, one per dependent question.

A2_BRANCHES = {
    "outcome": _options(
        "goal_evidence",
        ("certification", "Pass a certification"),
        ("sales", "Hit a sales result"),
        ("ranking", "Reach a ranking"),
        ("publication", "Publish something"),
    ),
    "skill": _options(
        "domain_scenes",
        ("work_applicable", "Use it at work"),
        ("portfolio_creation", "Build a portfolio"),
        ("teaching_capable", "Be able to teach it"),
        ("troubleshooting", "Solve problems on my own"),
    ),
    "habit": _options(
        "habit_target",
        ("daily", "Every day"),
        ("weekdays", "On weekdays"),
        ("three_times_week", "Three times a week"),
        ("weekend_intensive", "Intensively on weekends"),
    ),
    "knowledge": _options(
        "evidence_hint",
        ("exam_based", "Pass an exam"),
        ("no_exam", "No exam, just understanding"),
        ("past_questions", "Solve past questions"),
        ("self_summary", "Summarise it in my own words"),
    ),
}


def _scope(*entries) -> tuple:
    return _options("scope_style", *entries)


A3_BRANCHES = {
    # outcome
    "certification": _scope(
        ("exam_focused", "Cover the whole exam range"),
        ("weak_areas", "Focus on weak areas"),
        ("practice_intensive", "Drill practice problems"),
        ("flexible_exam", "Adjust as I go"),
    ),
    "sales": _scope(
        ("sales_broad", "Learn the whole sales process"),
        ("target_customer", "Focus on target customers"),
        ("closing_focus", "Master closing"),
        ("flexible_sales", "Adjust as I go"),
    ),
    "ranking": _scope(
        ("comprehensive", "Improve across the board"),
        ("key_metrics", "Push the key metrics"),
        ("single_skill", "Perfect a single skill"),
        ("flexible_performance", "Adjust as I go"),
    ),
    "publication": _scope(
        ("project_wide", "Build the whole project"),
        ("core_features", "Focus on core features"),
        ("mvp_focus", "Ship an MVP first"),
        ("flexible_project", "Adjust as I go"),
    ),
    # skill
    "work_applicable": _scope(
        ("job_comprehensive", "Cover the whole job"),
        ("current_priority", "Focus on current priorities"),
        ("expertise_one", "Become expert in one area"),
        ("flexible_work", "Adjust as I go"),
    ),
    "portfolio_creation": _scope(
        ("diverse_portfolio", "A diverse portfolio"),
        ("theme_focused", "Pieces around one theme"),
        ("masterpiece_one", "One masterpiece"),
        ("flexible_portfolio", "Adjust as I go"),
    ),
    "teaching_capable": _scope(
        ("teaching_broad", "Teach the whole field"),
        ("core_concepts", "Teach the core concepts"),
        ("specialty_deep", "Teach one specialty deeply"),
        ("flexible_teaching", "Adjust as I go"),
    ),
    "troubleshooting": _scope(
        ("problem_types", "Handle many problem types"),
        ("frequent_issues", "Handle the frequent issues"),
        ("root_cause", "Master root cause analysis"),
        ("flexible_trouble", "Adjust as I go"),
    ),
    # habit
    "daily": _scope(
        ("habit_broad", "Several habits at once"),
        ("priority_habits", "The most important habits"),
        ("single_habit", "One habit, done well"),
        ("flexible_habit", "Adjust as I go"),
    ),
    "weekdays": _scope(
        ("weekday_routine", "A full weekday routine"),
        ("work_balance", "Balance with work"),
        ("evening_focus", "Focused evening sessions"),
        ("flexible_weekday", "Adjust as I go"),
    ),
    "three_times_week": _scope(
        ("consistent_three", "Three steady sessions"),
        ("quality_three", "Three high-quality sessions"),
        ("intensive_session", "Intensive sessions"),
        ("flexible_three", "Adjust as I go"),
    ),
    "weekend_intensive": _scope(
        ("weekend_full", "Use the whole weekend"),
        ("saturday_sunday", "Split across Saturday and Sunday"),
        ("deep_weekend", "One deep weekend session"),
        ("flexible_weekend", "Adjust as I go"),
    ),
    # knowledge
    "exam_based": _scope(
        ("curriculum_full", "The full curriculum"),
        ("high_weight", "High-weight topics first"),
        ("weak_subject", "My weak subjects"),
        ("flexible_exam_prep", "Adjust as I go"),
    ),
    "no_exam": _scope(
        ("interest_driven", "Follow my interests"),
        ("practical_focus", "Practical topics"),
        ("deep_study", "Study one topic deeply"),
        ("flexible_learning", "Adjust as I go"),
    ),
    "past_questions": _scope(
        ("question_patterns", "Learn the question patterns"),
        ("frequent_topics", "Frequent topics first"),
        ("difficult_questions", "The hardest questions"),
        ("flexible_questions", "Adjust as I go"),
    ),
    "self_summary": _scope(
        ("comprehensive_notes", "Comprehensive notes"),
        ("key_concepts", "Key concepts only"),
        ("personal_method", "My own method"),
        ("flexible_summary", "Adjust as I go"),
    ),
}


def _cadence(*ids) -> tuple:
    labels = {
        "daily": "Every day",
        "every_other_day": "Every other day",
        "weekly": "Once a week",
        "milestone": "At each milestone",
    }
    return _options("review_cadence", *[(i, labels[i]) for i in ids])


B2_BRANCHES = {
    NoveltyLevel.NEW_HEAVY: _cadence("weekly", "milestone", "every_other_day"),
    NoveltyLevel.NEW_SOME: _cadence("every_other_day", "weekly", "daily"),
    NoveltyLevel.REPEAT_SOME: _cadence("daily", "every_other_day", "weekly"),
    NoveltyLevel.REPEAT_HEAVY: _cadence("daily", "every_other_day", "milestone"),
}


def _bias(*entries) -> tuple:
    return _options("difficulty_bias", *entries)


B3_BRANCHES = {
    "daily": _bias(
        ("steady_challenge", "A small stretch every day", 0.1),
        ("consistent_normal", "Steady, normal difficulty", 0),
        ("ambitious_daily", "Ambitious daily goals", 0.2),
        ("comfortable_daily", "Comfortable daily pace", -0.1),
    ),
    "every_other_day": _bias(
        ("moderate_challenge", "Moderate challenge", 0.1),
        ("balanced_approach", "Balanced", 0),
        ("safe_progression", "Safe progression", -0.1),
        ("intensive_biweekly", "Intensive sessions", 0.2),
    ),
    "weekly": _bias(
        ("weekly_intensive", "Intensive weekly sessions", 0.2),
        ("thorough_weekly", "Thorough weekly sessions", 0),
        ("gentle_weekly", "Gentle weekly sessions", -0.1),
        ("varied_weekly", "Varied weekly sessions", 0.1),
    ),
    "milestone": _bias(
        ("milestone_jump", "Big jumps between milestones", 0.2),
        ("milestone_review", "Review at each milestone", 0),
        ("milestone_gradual", "Gradual climb", 0.1),
        ("milestone_safe", "Safe, small milestones", -0.1),
    ),
}


def _kpi(*entries) -> tuple:
    return _options("kpi_shape", *entries)


C2_BRANCHES = {
    "credential_score": _kpi(
        ("pass_margin", "Pass with a margin"),
        ("accuracy_70", "70% accuracy or better"),
        ("mock_grade_a", "A-grade on a mock exam"),
        ("time_optimization", "Finish within the time limit"),
    ),
    "portfolio_demo": _kpi(
        ("one_work", "One finished piece"),
        ("two_works", "Two finished pieces"),
        ("three_works", "Three finished pieces"),
        ("one_high_quality", "One high-quality piece"),
    ),
    "realworld_result": _kpi(
        ("one_deal", "Close one deal"),
        ("three_deals", "Close three deals"),
        ("one_deployment", "One production deployment"),
        ("poc", "A proof of concept"),
    ),
    "presentation_review": _kpi(
        ("lt_one", "One lightning talk"),
        ("lt_two", "Two lightning talks"),
        ("review_one", "One expert review"),
        ("review_two", "Two expert reviews"),
    ),
}


def _capstone(*entries) -> tuple:
    return _options("capstone_type", *entries)


C3_BRANCHES = {
    "pass_margin": _capstone(
        ("mock_test_series", "A series of mock tests", "test"),
        ("practice_exam", "A full practice exam", "test"),
        ("study_presentation", "Present what I studied", "presentation"),
        ("peer_review", "Peer review", "presentation"),
    ),
    "accuracy_70": _capstone(
        ("accuracy_test", "An accuracy test", "test"),
        ("timed_challenge", "A timed challenge", "test"),
        ("progress_demo", "A progress demo", "demo"),
        ("skill_presentation", "A skill presentation", "presentation"),
    ),
    "mock_grade_a": _capstone(
        ("final_mock", "A final mock exam", "test"),
        ("multiple_mocks", "Several mock exams", "test"),
        ("teaching_others", "Teach others", "presentation"),
        ("knowledge_demo", "A knowledge demo", "demo"),
    ),
    "time_optimization": _capstone(
        ("speed_test", "A speed test", "test"),
        ("efficiency_demo", "An efficiency demo", "demo"),
        ("method_presentation", "Present my method", "presentation"),
        ("real_application", "Apply it for real", "production"),
    ),
    "one_work": _capstone(
        ("portfolio_showcase", "A portfolio showcase", "demo"),
        ("client_presentation", "Present to a client", "presentation"),
        ("production_launch", "Launch it", "production"),
        ("peer_review_work", "Peer review of the work", "presentation"),
    ),
    "two_works": _capstone(
        ("comparison_demo", "A side-by-side demo", "demo"),
        ("series_presentation", "Present them as a series", "presentation"),
        ("dual_production", "Ship both", "production"),
        ("portfolio_expansion", "Add them to my portfolio", "demo"),
    ),
    "three_works": _capstone(
        ("gallery_exhibition", "An exhibition", "demo"),
        ("series_launch", "Launch them as a series", "demo"),
        ("progressive_presentation", "Present the progression", "presentation"),
        ("selective_production", "Ship the best one", "production"),
    ),
    "one_high_quality": _capstone(
        ("masterpiece_demo", "Demo the masterpiece", "demo"),
        ("expert_presentation", "Present to experts", "presentation"),
        ("flagship_production", "Ship it as a flagship", "production"),
        ("award_submission", "Submit it for an award", "presentation"),
    ),
    "one_deal": _capstone(
        ("client_research", "Client research", "test"),
        ("pitch_demo", "A pitch demo", "demo"),
        ("case_study", "A case study", "presentation"),
        ("real_negotiation", "A real negotiation", "production"),
    ),
    "three_deals": _capstone(
        ("sales_test", "A sales role-play", "test"),
        ("pipeline_demo", "A pipeline demo", "demo"),
        ("sales_presentation", "A sales presentation", "presentation"),
        ("actual_sales", "Real sales", "production"),
    ),
    "one_deployment": _capstone(
        ("deployment_test", "A deployment test", "test"),
        ("system_demo", "A system demo", "demo"),
        ("tech_presentation", "A technical presentation", "presentation"),
        ("production_deploy", "A production deployment", "production"),
    ),
    "poc": _capstone(
        ("concept_test", "A concept test", "test"),
        ("prototype_demo", "A prototype demo", "demo"),
        ("poc_presentation", "Present the PoC", "presentation"),
        ("proof_delivery", "Deliver the proof", "production"),
    ),
    "lt_one": _capstone(
        ("speech_test", "A practice talk", "test"),
        ("lt_rehearsal", "A rehearsal", "demo"),
        ("lightning_talk", "A lightning talk", "presentation"),
        ("community_lt", "A talk at a community event", "production"),
    ),
    "lt_two": _capstone(
        ("double_speech_test", "Two practice talks", "test"),
        ("series_rehearsal", "A rehearsal series", "demo"),
        ("two_lt_sessions", "Two lightning talks", "presentation"),
        ("advanced_community", "Talks at bigger events", "production"),
    ),
    "review_one": _capstone(
        ("expert_assessment", "An expert assessment", "test"),
        ("review_demo", "A demo for review", "demo"),
        ("expert_presentation", "Present to an expert", "presentation"),
        ("professional_review", "A professional review", "production"),
    ),
    "review_two": _capstone(
        ("iterative_assessment", "Repeated assessments", "test"),
        ("improvement_demo", "Demo the improvements", "demo"),
        ("progress_presentation", "Present my progress", "presentation"),
        ("double_expert_review", "Two expert reviews", "production"),
    ),
}


def _trigger(*entries) -> tuple:
    return _options("dropoff_trigger", *entries)


D2_BRANCHES = {
    "time": _trigger(
        ("schedule_slip", "The schedule slipping"),
        ("overtime_work", "Overtime at work"),
        ("urgent_tasks", "Urgent tasks"),
        ("time_management", "Poor time management"),
    ),
    "difficulty": _trigger(
        ("complex_concepts", "Complex concepts"),
        ("prerequisite_lack", "Missing prerequisites"),
        ("error_stuck", "Getting stuck on errors"),
        ("learning_curve", "A steep learning curve"),
    ),
    "focus": _trigger(
        ("fatigue", "Being tired"),
        ("notification_noise", "Notifications and interruptions"),
        ("environment", "My surroundings"),
        ("mood_low", "Low mood"),
    ),
    "meaning": _trigger(
        ("goal_unclear", "An unclear goal"),
        ("progress_invisible", "Not seeing progress"),
        ("relevance_doubt", "Doubting it matters"),
        ("comparison_others", "Comparing myself to others"),
    ),
}


def _fallback(*entries) -> tuple:
    return _options("fallback_strategy", *entries)


D3_BRANCHES = {
    "time_schedule_slip": _fallback(
        ("flexible_scheduling", "Reschedule flexibly", "defer"),
        ("micro_tasks", "Do a micro task", "micro_switch"),
        ("buffer_time", "Use buffer time", "substitute"),
        ("accountability_partner", "Check in with a partner", "announce"),
    ),
    "time_overtime_work": _fallback(
        ("commute_learning", "Study on the commute", "micro_switch"),
        ("weekend_catchup", "Catch up at the weekend", "defer"),
        ("audio_content", "Switch to audio", "substitute"),
        ("colleague_support", "Ask a colleague", "announce"),
    ),
    "time_urgent_tasks": _fallback(
        ("priority_triage", "Triage priorities", "substitute"),
        ("tomorrow_reset", "Reset tomorrow", "defer"),
        ("quick_review", "A quick review", "micro_switch"),
        ("mentor_advice", "Ask a mentor", "announce"),
    ),
    "time_time_management": _fallback(
        ("time_audit", "Audit my time", "substitute"),
        ("priority_focus", "Focus on one priority", "micro_switch"),
        ("time_accountability", "Report my time to someone", "announce"),
        ("schedule_restructure", "Restructure the schedule", "defer"),
    ),
    "difficulty_complex_concepts": _fallback(
        ("simpler_materials", "Use simpler materials", "substitute"),
        ("step_by_step", "Go step by step", "micro_switch"),
        ("study_group", "Ask a study group", "announce"),
        ("concept_review", "Review the concept later", "defer"),
    ),
    "difficulty_prerequisite_lack": _fallback(
        ("foundation_study", "Study the foundations", "substitute"),
        ("guided_learning", "Get guidance", "announce"),
        ("incremental_approach", "Come back incrementally", "defer"),
        ("basics_practice", "Practise the basics", "micro_switch"),
    ),
    "difficulty_error_stuck": _fallback(
        ("expert_help", "Ask an expert", "announce"),
        ("alternative_approach", "Try another approach", "substitute"),
        ("debugging_session", "A short debugging session", "micro_switch"),
        ("fresh_perspective", "Come back fresh", "defer"),
    ),
    "difficulty_learning_curve": _fallback(
        ("gentler_approach", "A gentler approach", "substitute"),
        ("baby_steps", "Baby steps", "micro_switch"),
        ("learning_buddy", "A learning buddy", "announce"),
        ("curve_patience", "Be patient and retry later", "defer"),
    ),
    "focus_fatigue": _fallback(
        ("energy_management", "Manage my energy", "substitute"),
        ("power_nap", "Take a power nap", "micro_switch"),
        ("motivation_boost", "Get a motivation boost", "announce"),
        ("rest_and_reset", "Rest and reset", "defer"),
    ),
    "focus_notification_noise": _fallback(
        ("distraction_blocking", "Block distractions", "substitute"),
        ("pomodoro_technique", "Use a pomodoro", "micro_switch"),
        ("study_buddy", "Study with a buddy", "announce"),
        ("environment_change", "Change environment later", "defer"),
    ),
    "focus_environment": _fallback(
        ("location_change", "Change location", "substitute"),
        ("noise_canceling", "Use noise cancelling", "micro_switch"),
        ("family_cooperation", "Ask family to help", "announce"),
        ("optimal_time", "Wait for a better time", "defer"),
    ),
    "focus_mood_low": _fallback(
        ("mood_boosting", "Do something uplifting", "substitute"),
        ("micro_accomplishment", "A tiny accomplishment", "micro_switch"),
        ("emotional_support", "Talk to someone", "announce"),
        ("mental_rest", "Take a mental rest", "defer"),
    ),
    "meaning_goal_unclear": _fallback(
        ("goal_clarification", "Clarify the goal", "substitute"),
        ("vision_reminder", "Reread my vision", "micro_switch"),
        ("mentor_guidance", "Ask a mentor", "announce"),
        ("motivation_reset", "Reset motivation later", "defer"),
    ),
    "meaning_progress_invisible": _fallback(
        ("progress_tracking", "Track progress", "substitute"),
        ("small_wins", "Collect a small win", "micro_switch"),
        ("progress_sharing", "Share progress", "announce"),
        ("milestone_celebration", "Celebrate the next milestone", "defer"),
    ),
    "meaning_relevance_doubt": _fallback(
        ("purpose_reconnection", "Reconnect with the purpose", "substitute"),
        ("success_stories", "Read a success story", "micro_switch"),
        ("community_discussion", "Discuss with a community", "announce"),
        ("motivation_reboot", "Reboot motivation later", "defer"),
    ),
    "meaning_comparison_others": _fallback(
        ("self_confidence", "Build self-confidence", "substitute"),
        ("positive_affirmation", "A positive affirmation", "micro_switch"),
        ("supportive_community", "Find a supportive community", "announce"),
        ("comparison_detox", "Take a break from comparing", "defer"),
    ),
}


def get_question(block: Union[BlockId, str], step: int) -> Question:
    """
    Get the base question at a position.

    Raises:
        QuestionNotFoundError: if the position names no question
    """
    question_id = QuestionId.of(block, step)
    question = QUESTIONS.get(question_id)
    if question is None:
        raise QuestionNotFoundError(block, step)
    return question
