"""
Services module for the confidence pool.

This module organizes services into:
- scoring: Pure scoring core (confidence engine, standings, mock draft evaluator, validation)
- leaderboard_service: League standings from the entity store
- prediction_service: Saving and reading member predictions
- mock_draft_service: Ranked mock drafts and per-expert lookups
- mock_draft_import: Importing parsed mock draft rows
- draft_admin_service: Recording actual picks and draft lifecycle flags
- league_service: Creating leagues, joining by invite code, removing members, deleting leagues
"""
