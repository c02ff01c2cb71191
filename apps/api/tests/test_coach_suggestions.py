"""Tests for follow-up suggestions and conversation starters."""
from datetime import datetime

import pytest

from models import Workout
from services.coach_suggestions import (
    DEFAULT_FOLLOW_UPS,
    MAX_FOLLOW_UPS,
    STARTERS_NEW_USER,
    STARTERS_WITH_HISTORY,
    conversation_starters,
    suggest_follow_ups,
)


class TestSuggestFollowUps:

    def test_form_question_suggests_mistakes_to_avoid(self):
        suggestions = suggest_follow_ups("How is my form on dips?")
        assert suggestions[0] == "What are common mistakes to avoid?"
        assert "Can you suggest some drills to improve my form?" in suggestions

    def test_keywords_match_case_insensitively(self):
        assert suggest_follow_ups("TECHNIQUE check please")[0] == "What are common mistakes to avoid?"

    def test_buckets_concatenate_in_priority_order_and_cap_at_three(self):
        suggestions = suggest_follow_ups("Which exercise helps my form and my goal?")
        assert len(suggestions) == MAX_FOLLOW_UPS
        assert suggestions == [
            "What's the best progression for this exercise?",
            "How often should I train this?",
            "What are common mistakes to avoid?",
        ]

    def test_goal_bucket(self):
        assert suggest_follow_ups("Am I making progress?") == [
            "Create a weekly training plan for me",
            "What milestones should I aim for?",
        ]

    def test_no_keyword_falls_back_to_defaults(self):
        assert suggest_follow_ups("hello coach") == list(DEFAULT_FOLLOW_UPS)

    @pytest.mark.parametrize("message", ["", "   ", "What about sleep?"])
    def test_never_more_than_three(self, message):
        assert 1 <= len(suggest_follow_ups(message)) <= MAX_FOLLOW_UPS


class TestConversationStarters:

    def test_new_user_gets_beginner_starters(self, db_session, test_user):
        assert conversation_starters(db_session, test_user.id) == list(STARTERS_NEW_USER)

    def test_user_with_workouts_gets_history_starters(self, db_session, test_user):
        db_session.add(Workout(user_id=test_user.id, name="Legs", date=datetime(2024, 6, 1)))
        db_session.commit()

        assert conversation_starters(db_session, test_user.id) == list(STARTERS_WITH_HISTORY)
