ROOT_LAYOUT_MARGINS = (0, 0, 0, 0)
ROOT_LAYOUT_SPACING = 0
TOP_BAR_MARGINS = (12, 8, 12, 8)
TOP_BAR_SPACING = 8
TOP_BAR_TITLE_SPACING = 12
ZOOM_BUTTON_WIDTH = 32

LINE_WIDTH = 3.0
PREVIEW_LINE_RGBA = (255, 255, 0, 230)
PREVIEW_DASH_PATTERN = (8.0, 6.0)
MEASUREMENT_LINE_RGBA = (0, 0, 0, 255)

LABEL_OFFSET_X = 6.0
LABEL_OFFSET_Y = -6.0
LABEL_PADDING = 4.0
LABEL_CORNER_RADIUS = 4.0
LABEL_TEXT_RGBA = (255, 255, 255, 255)
LABEL_BACKGROUND_RGBA = (0, 0, 0, 153)

CALIBRATION_DIALOG_TITLE = "Calibration"
CALIBRATION_DIALOG_HEADER = "Enter the real-world length of the drawn line (feet and inches)"
