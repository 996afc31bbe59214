# Project MUSE - segmenter.py
# Person Segmentation (MediaPipe Selfie Segmentation)
# (C) 2025 MUSE Corp. All rights reserved.

import os

import mediapipe as mp

from muse_booth.graphics import buffers
from muse_booth.utils.logger import get_logger


class SelfieSegmenter:
    """
    [AI] Person mask provider.

    segment(frame) takes an RGBA frame buffer and returns an RGBA mask buffer
    of the same size (alpha = person probability * 255), or None when the
    model produced no mask.

    Backends:
    - model_path given (.tflite, e.g. selfie_segmenter.tflite): Tasks API ImageSegmenter
    - otherwise: legacy mp.solutions.selfie_segmentation
    """

    def __init__(self, model_selection=0, model_path=None):
        """
        model_selection: 0 = general (256x256), 1 = landscape (144x256); legacy backend only
        """
        self.logger = get_logger("Segmenter")
        self.model_selection = model_selection
        self.model = None
        self.segmenter = None

        if model_path and os.path.exists(model_path):
            self._init_tasks(model_path)
        else:
            if model_path:
                self.logger.warning(f"Model file not found: {model_path}. Trying legacy solution.")
            self._init_legacy()

    def _init_tasks(self, model_path):
        options = mp.tasks.vision.ImageSegmenterOptions(
            base_options=mp.tasks.BaseOptions(model_asset_path=model_path),
            running_mode=mp.tasks.vision.RunningMode.IMAGE,
            output_confidence_masks=True,
            output_category_mask=False,
        )
        self.segmenter = mp.tasks.vision.ImageSegmenter.create_from_options(options)
        self.logger.info(f"Selfie segmenter ready (Tasks API: {os.path.basename(model_path)})")

    def _init_legacy(self):
        solutions = getattr(mp, "solutions", None)
        if solutions is None or not hasattr(solutions, "selfie_segmentation"):
            raise RuntimeError(
                "This mediapipe build has no legacy selfie_segmentation; "
                "set 'model_path' to a selfie_segmenter.tflite file."
            )
        self.model = solutions.selfie_segmentation.SelfieSegmentation(model_selection=self.model_selection)
        self.logger.info(f"Selfie segmentation ready (model_selection={self.model_selection})")

    def segment(self, frame):
        if frame is None:
            return None

        h, w = frame.shape[:2]
        rgb = buffers.to_rgb(frame)

        if self.segmenter is not None:
            result = self.segmenter.segment(mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb))
            masks = result.confidence_masks
            if not masks:
                return None
            # Single-class selfie model: one person-confidence mask
            # Multiclass model: index 0 is background
            if len(masks) == 1:
                prob = masks[0].numpy_view()
            else:
                prob = 1.0 - masks[0].numpy_view()
        else:
            rgb.flags.writeable = False
            results = self.model.process(rgb)
            prob = getattr(results, "segmentation_mask", None)
            if prob is None:
                return None

        return buffers.mask_from_probability(prob, w, h)

    def close(self):
        if self.model is not None:
            self.model.close()
            self.model = None
        if self.segmenter is not None:
            self.segmenter.close()
            self.segmenter = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
