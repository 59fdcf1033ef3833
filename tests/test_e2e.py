"""End-to-end test via main.py."""
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def test_tests_suite():
    """Run TESTS suite end-to-end - should complete without errors."""
    env = {**os.environ, "SKIP_MLFLOW": "1"}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH")]))
    result = subprocess.run([
        sys.executable, "main.py",
        "--sweep", "configs/sweeps.yaml",
        "--suite", "TESTS",
    ], cwd=ROOT, env=env, capture_output=True, text=True, timeout=120)

    # Show output if failed
    assert result.returncode == 0, f"Suite failed:\n{result.stdout}\n{result.stderr}"
    assert "Successful: 4" in result.stdout


def test_module_entry_point_direct_run(tmp_path):
    env = {**os.environ, "SKIP_MLFLOW": "1"}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH")]))
    output = tmp_path / "counts.npz"
    result = subprocess.run([
        sys.executable, "-m", "mandelbrot",
        "--image-size=10x8",
        "--upper-left=-1.20,0.35",
        "--lower-right=-1,0.20",
        f"--output={output}",
    ], cwd=ROOT, env=env, capture_output=True, text=True, timeout=120)

    assert result.returncode == 0, f"Run failed:\n{result.stdout}\n{result.stderr}"
    assert output.exists()
