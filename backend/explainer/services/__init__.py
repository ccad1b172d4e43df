"""
Services package

Pipeline (video generation flow):
    - pipeline/planning: Topic -> Plan
    - pipeline/audio: Per-step narration (text-to-speech)
    - pipeline/animation: Scene code generation, validation, rendering, retry loop
    - pipeline/assembly: Audio/video merge
    - pipeline/orchestrator.py: Stage sequencing for one run

Infrastructure (technical concerns):
    - infrastructure/llm: Gemini client
    - infrastructure/storage: Project workspace layout
    - infrastructure/orchestration: Job queue and worker
    - infrastructure/parsing: Code extraction utilities
"""
