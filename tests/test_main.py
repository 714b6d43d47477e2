import pytest

from landscape_classifier.cste import ClassifierConfig
from landscape_classifier.main import main
from landscape_classifier.training_set import export_training_set


@pytest.fixture
def training_file(tmp_path, layers, labelled_intensities):
    path = tmp_path / "training.txt"
    export_training_set(str(path), layers, labelled_intensities)
    return str(path)


def test_info(training_file, layers, capsys):
    assert main(["info", training_file, "--available", layers[0].path]) == 0
    out = capsys.readouterr().out

    assert "3 layers" in out
    assert "4 samples" in out
    assert "Water" in out and "2" in out
    assert f"missing layer: {layers[1].path}" in out
    assert f"missing layer: {layers[0].path}" not in out


def test_train_saves_model(training_file, tmp_path):
    model_dir = tmp_path / "models"
    assert main(["train", training_file, "--model-dir", str(model_dir)]) == 0
    assert (model_dir / ClassifierConfig.MODEL_FILENAME).exists()


def test_malformed_file_exits_with_error(tmp_path):
    path = tmp_path / "broken.txt"
    path.write_text("not a number\n", encoding="utf-8")
    assert main(["info", str(path)]) == 1


def test_missing_file_exits_with_error(tmp_path):
    assert main(["train", str(tmp_path / "absent.txt")]) == 1
