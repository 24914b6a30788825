"""
asvprep Pipeline Stages

Fixed order (stage number -> module):
    1. download: Download & extract LA.zip
    2. protocol: Enrollment merge, concatenation, protocol rewrite
    3. trials: Kaldi-style test directory and ESPnet trials
    4. train: Kaldi-style train directory
    5. augmentation: MUSAN / RIRS_NOISES and their scp lists
"""
