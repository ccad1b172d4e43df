"""
Pipeline services - core video generation flow.

Pipeline Stages:
1. Planning - Topic to structured Plan
2. Narration - Per-step text-to-speech with measured durations
3. Scene generation - Generate, validate and render Manim code with retries
4. Merge - Combine narration and rendered video
"""
