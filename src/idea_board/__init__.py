"""Idea Board: an internal board for submitting, voting on and refining ideas."""
