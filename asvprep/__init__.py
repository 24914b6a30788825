"""
asvprep: ASVspoof 2019 LA data preparation

Pipeline Stages (fixed order):
    1. Download & extract LA.zip
    2. Protocol normalization (LA_asv_eval)
    3. Kaldi-style test directory and trials
    4. Kaldi-style train directory
    5. MUSAN / RIRS_NOISES augmentation lists

Invariants:
    - Stages run in ascending order, filtered by [stage, stop_stage]
    - Existence of a stage's target directory means the stage is done
    - Data transformation happens in separate processes (asvprep.local)
    - Pipeline stops on first failure, nothing is rolled back
"""

__version__ = "0.1.0"
