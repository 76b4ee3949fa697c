import numpy as np
import pytest

from eeg_biomarkers.core.config import AnalysisConfig
from eeg_biomarkers.core.data_types import Channel, Recording

from .signals import FS, sine


@pytest.fixture
def sequential_config():
    # In-process analysis keeps tests deterministic and fast
    return AnalysisConfig(n_jobs=1)


@pytest.fixture
def antiphase_recording():
    a = sine(10.0)
    b = sine(10.0, phase=np.pi)
    return Recording(channels=[Channel("A", a, FS), Channel("B", b, FS)], sampling_rate_hz=FS)


@pytest.fixture
def zero_recording():
    return Recording(channels=[Channel("Fz", np.zeros(512), FS)], sampling_rate_hz=FS)
