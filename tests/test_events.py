from mazecast.events import (
    BACK_KEY,
    FORWARD_KEY,
    LEFT_MOUSE_BUTTON,
    QUIT_KEY,
    RIGHT_MOUSE_BUTTON,
    Calibration,
    Events,
    EventSource,
    InputState,
    get_events,
)


def test_no_input_no_events():
    mask = EventSource.MOUSE | EventSource.JOYSTICK | EventSource.KEYBOARD
    assert get_events(mask, InputState()) == Events()


def test_keyboard_keys():
    state = InputState(keys={FORWARD_KEY, QUIT_KEY})
    events = get_events(EventSource.KEYBOARD, state)
    assert events == Events(go_forward=True, abort=True)


def test_mask_filters_devices():
    state = InputState(keys={BACK_KEY})
    assert get_events(EventSource.MOUSE, state) == Events()
    assert get_events(EventSource.KEYBOARD, state).go_back is True


def test_mouse_vertical_threshold():
    assert get_events(EventSource.MOUSE, InputState(mouse_dy=-5)).go_forward is False
    assert get_events(EventSource.MOUSE, InputState(mouse_dy=-6)).go_forward is True
    assert get_events(EventSource.MOUSE, InputState(mouse_dy=6)).go_back is True


def test_mouse_horizontal_threshold():
    assert get_events(EventSource.MOUSE, InputState(mouse_dx=20)).go_right is False
    assert get_events(EventSource.MOUSE, InputState(mouse_dx=21)).go_right is True
    assert get_events(EventSource.MOUSE, InputState(mouse_dx=-21)).go_left is True


def test_mouse_buttons():
    assert get_events(EventSource.MOUSE, InputState(mouse_buttons=LEFT_MOUSE_BUTTON)).abort
    assert not get_events(EventSource.MOUSE, InputState(mouse_buttons=RIGHT_MOUSE_BUTTON)).abort


def test_joystick_relative_to_centre():
    calibration = Calibration()
    calibration.set_center(500, 500)
    assert get_events(EventSource.JOYSTICK, InputState(500, 500), calibration) == Events()
    events = get_events(EventSource.JOYSTICK, InputState(399, 601), calibration)
    assert events == Events(go_back=True, go_left=True)


def test_joystick_button_aborts():
    events = get_events(EventSource.JOYSTICK, InputState(joystick_button=True))
    assert events.abort is True


def test_calibration_setters():
    calibration = Calibration()
    calibration.set_min(1, 2)
    calibration.set_max(3, 4)
    calibration.set_center(5, 6)
    assert (calibration.xmin, calibration.ymin) == (1, 2)
    assert (calibration.xmax, calibration.ymax) == (3, 4)
    assert (calibration.xcent, calibration.ycent) == (5, 6)


def test_integer_mask_combines_devices():
    state = InputState(mouse_dy=-10, keys={BACK_KEY})
    events = get_events(5, state)
    assert events.go_forward and events.go_back