from goldfish.input import InputState, MouseButton


def test_defaults_mean_unknown_position():
    state = InputState()
    assert (state.mouse_x, state.mouse_y, state.mouse_flag) == (-1, -1, 0)
    assert state.left_pressed() is False


def test_left_pressed_when_flag_set():
    state = InputState(mouse_x=10, mouse_y=20, mouse_flag=MouseButton.LEFT)
    assert state.left_pressed() is True


def test_other_bits_do_not_count_as_left():
    state = InputState(mouse_flag=2)
    assert state.left_pressed() is False


def test_release_clears_press():
    state = InputState(mouse_flag=MouseButton.LEFT)
    state.mouse_flag &= ~MouseButton.LEFT
    assert state.left_pressed() is False