from explainer.services.infrastructure.parsing import (
    extract_python_code,
    extract_scene_name,
    scene_file_name,
)


def test_extract_python_code_from_fenced_block():
    response = "Here you go:\n```python\nfrom manim import *\n\nclass A(Scene):\n    pass\n```\nEnjoy!"
    assert extract_python_code(response) == "from manim import *\n\nclass A(Scene):\n    pass"


def test_extract_python_code_prefers_longest_block():
    response = "```python\nx = 1\n```\ntext\n```python\nclass Big(Scene):\n    def construct(self):\n        pass\n```"
    assert extract_python_code(response).startswith("class Big(Scene)")


def test_extract_python_code_untagged_and_bare():
    assert extract_python_code("```\nprint('hi')\n```") == "print('hi')"
    assert extract_python_code("  class A(Scene): pass  ") == "class A(Scene): pass"


def test_extract_scene_name_variants():
    assert extract_scene_name("class WaveDemo(Scene):\n    pass") == "WaveDemo"
    assert extract_scene_name("class Cam(MovingCameraScene):\n    pass") == "Cam"
    assert extract_scene_name("class Q(manim.ThreeDScene):\n    pass") == "Q"
    assert extract_scene_name("class Mixed(Scene, Helper):\n    pass") == "Mixed"


def test_extract_scene_name_missing():
    assert extract_scene_name("class Helper(object):\n    pass") is None
    assert extract_scene_name("# Scene class goes here") is None


def test_scene_file_name():
    assert scene_file_name("WaveInterference") == "waveinterference.py"
    assert scene_file_name("Wave_2D") == "wave_2d.py"
