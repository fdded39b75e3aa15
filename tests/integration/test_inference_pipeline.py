"""
Integration tests for the classification pipeline.

Tests the complete workflow from configuration and image files to
ranked predictions and the command line script, with the native runtime
replaced by the fake interpreter.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from mobilenet_classifier.inference.pipelines import ClassificationPipeline
from mobilenet_classifier.inference.postprocessing import ResultAggregator
from mobilenet_classifier.utils.config import Config
from mobilenet_classifier.utils.exceptions import InvalidImageError, ModelLoadError


SCRIPTS_DIR = Path(__file__).parent.parent.parent / "scripts"


def load_script(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.integration
class TestClassificationPipeline:
    """Test the pipeline end to end."""

    def test_predict_single(self, fake_runtime, sample_config, sample_image_dir):
        pipeline = ClassificationPipeline(sample_config)

        result = pipeline.predict_single(sample_image_dir / "image_0.jpg")

        assert result["image_path"].endswith("image_0.jpg")
        assert result["label"] == "tench"
        assert result["confidence"] == pytest.approx(200 / 256)
        assert [c["label"] for c in result["top_k"]] == [
            "tench",
            "goldfish",
            "tiger shark",
        ]
        assert (result["image_height"], result["image_width"]) == (48, 64)
        assert result["inference_time_ms"] >= 0
        assert "scores" not in result

    def test_return_all_scores(self, fake_runtime, sample_config, mock_image_rgb):
        sample_config.inference.return_all_scores = True
        pipeline = ClassificationPipeline(sample_config)

        result = pipeline.predict_image(mock_image_rgb)

        assert len(result["scores"]) == 5
        assert result["scores"]["background"] == pytest.approx(10 / 256)

    def test_confidence_threshold_can_empty_ranking(
        self, fake_runtime, sample_config, mock_image_rgb
    ):
        sample_config.inference.confidence_threshold = 0.99
        pipeline = ClassificationPipeline(sample_config)

        result = pipeline.predict_image(mock_image_rgb)

        assert result["label"] is None
        assert result["confidence"] == 0.0
        assert result["top_k"] == []

    def test_predict_batch_skips_invalid_images(
        self, fake_runtime, sample_config, sample_image_dir
    ):
        pipeline = ClassificationPipeline(sample_config)
        paths = sorted(sample_image_dir.glob("*.jpg")) + [sample_image_dir / "notes.txt"]

        results = pipeline.predict_batch(paths)

        assert len(results) == 3
        assert pipeline.get_performance_stats()["total_inferences"] == 3

    def test_predict_single_rejects_invalid_image(
        self, fake_runtime, sample_config, sample_image_dir
    ):
        pipeline = ClassificationPipeline(sample_config)

        with pytest.raises(InvalidImageError, match="notes.txt"):
            pipeline.predict_single(sample_image_dir / "notes.txt")

        assert fake_runtime.instances[-1].invoke_count == 0

    def test_summary_with_unranked_predictions(
        self, fake_runtime, sample_config, mock_image_rgb
    ):
        pipeline = ClassificationPipeline(sample_config)
        confident = pipeline.predict_image(mock_image_rgb)
        pipeline.inference_config.confidence_threshold = 0.99
        unranked = pipeline.predict_image(mock_image_rgb)

        summary = ResultAggregator().summarize([confident, unranked])

        assert unranked["label"] is None
        assert summary["label_distribution"] == {"tench": 1, "unknown": 1}

    def test_warmup_and_stats(self, fake_runtime, sample_config):
        pipeline = ClassificationPipeline(sample_config)

        assert "message" in pipeline.get_performance_stats()

        pipeline.warmup(2)

        assert fake_runtime.instances[-1].invoke_count == 2
        assert "message" in pipeline.get_performance_stats()

    def test_clear_cache(self, fake_runtime, sample_config, mock_image_rgb):
        pipeline = ClassificationPipeline(sample_config)
        pipeline.predict_image(mock_image_rgb)

        stats = pipeline.get_performance_stats()
        assert stats["total_inferences"] == 1
        assert stats["throughput_fps"] >= 0

        pipeline.clear_cache()
        assert pipeline.inference_times == []

    def test_close(self, fake_runtime, sample_config):
        with ClassificationPipeline(sample_config) as pipeline:
            pass

        assert pipeline.classifier.model.is_closed

    def test_missing_model(self, fake_runtime, temp_dir):
        config = Config()
        config.model.model_path = str(temp_dir / "missing.tflite")

        with pytest.raises(ModelLoadError):
            ClassificationPipeline(config)


@pytest.mark.integration
class TestScripts:
    """Test the command line scripts."""

    def test_predict_directory(self, fake_runtime, model_file, sample_image_dir, temp_dir):
        predict = load_script("predict")
        output = temp_dir / "out" / "predictions.json"

        exit_code = predict.main(
            [
                "--model",
                str(model_file),
                "--input",
                str(sample_image_dir),
                "--output",
                str(output),
                "--top-k",
                "2",
            ]
        )

        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data["metadata"]["processed_images"] == 4
        assert data["summary"]["most_common_label"] == "tench"
        assert all(len(p["top_k"]) == 2 for p in data["predictions"])

    def test_predict_with_config_and_filter(
        self, fake_runtime, sample_config, sample_image_dir, temp_dir
    ):
        predict = load_script("predict")
        config_path = temp_dir / "config.yaml"
        sample_config.save_yaml(config_path)
        list_file = temp_dir / "images.txt"
        list_file.write_text(f"{sample_image_dir / 'image_0.jpg'}\n\n")
        output = temp_dir / "filtered.json"

        exit_code = predict.main(
            [
                "--config",
                str(config_path),
                "--input-list",
                str(list_file),
                "--output",
                str(output),
                "--filter-low-confidence",
                "--min-confidence",
                "0.9",
            ]
        )

        assert exit_code == 0
        data = json.loads(output.read_text())
        assert data["predictions"] == []
        assert data["filter_statistics"]["passed_filter"] == 0

    def test_predict_missing_model(self, fake_runtime, sample_image_dir, temp_dir):
        predict = load_script("predict")

        exit_code = predict.main(
            [
                "--model",
                str(temp_dir / "missing.tflite"),
                "--input",
                str(sample_image_dir),
                "--output",
                str(temp_dir / "never.json"),
            ]
        )

        assert exit_code == 1
        assert not (temp_dir / "never.json").exists()

    def test_predict_missing_input(self, fake_runtime, model_file, temp_dir):
        predict = load_script("predict")

        exit_code = predict.main(
            ["--model", str(model_file), "--input", str(temp_dir / "nowhere")]
        )

        assert exit_code == 1

    def test_inspect_model(self, fake_runtime, model_file, capsys):
        inspect_model = load_script("inspect_model")

        exit_code = inspect_model.main([str(model_file), "--show-labels", "2"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "shape=[1, 224, 224, 3]" in out
        assert "scale=0.0078125 zero_point=128" in out
        assert "labels.txt: 5 labels (background, tench, ...)" in out
