from keycrawl.dungeon.rooms import Direction
from keycrawl.input import ACTION_DIRECTIONS, InputAction, InputMapper


def test_default_mapping_movement_arrows_and_wasd():
    mapper = InputMapper.default()

    assert mapper.translate_key("UP") == InputAction.MOVE_UP
    assert mapper.translate_key("W") == InputAction.MOVE_UP
    # Case-insensitive
    assert mapper.translate_key("w") == InputAction.MOVE_UP

    assert mapper.translate_key("DOWN") == InputAction.MOVE_DOWN
    assert mapper.translate_key("S") == InputAction.MOVE_DOWN
    assert mapper.translate_key("LEFT") == InputAction.MOVE_LEFT
    assert mapper.translate_key("A") == InputAction.MOVE_LEFT
    assert mapper.translate_key("RIGHT") == InputAction.MOVE_RIGHT
    assert mapper.translate_key("D") == InputAction.MOVE_RIGHT


def test_browser_key_codes_are_aliased():
    mapper = InputMapper.default()
    assert mapper.translate_key("KeyW") == InputAction.MOVE_UP
    assert mapper.translate_key("ArrowUp") == InputAction.MOVE_UP
    assert mapper.translate_key("KeyA") == InputAction.MOVE_LEFT
    assert mapper.translate_key("ArrowLeft") == InputAction.MOVE_LEFT
    assert mapper.translate_key("KeyS") == InputAction.MOVE_DOWN
    assert mapper.translate_key("ArrowDown") == InputAction.MOVE_DOWN
    assert mapper.translate_key("KeyD") == InputAction.MOVE_RIGHT
    assert mapper.translate_key("ArrowRight") == InputAction.MOVE_RIGHT


def test_default_mapping_meta_actions():
    mapper = InputMapper.default()
    assert mapper.translate_key("F1") == InputAction.TOGGLE_DEBUG
    assert mapper.translate_key("r") == InputAction.NEW_DUNGEON
    assert mapper.translate_key("ESCAPE") == InputAction.QUIT
    assert mapper.translate_key("eSc") == InputAction.QUIT
    assert mapper.translate_key("q") == InputAction.QUIT


def test_on_key_event_helper_creates_events():
    mapper = InputMapper.default()

    event = mapper.on_key_event("w", pressed=True)
    assert event is not None
    assert event.action == InputAction.MOVE_UP
    assert event.pressed is True
    assert event.source == "keyboard"

    assert mapper.on_key_event("F13", pressed=True) is None
    assert mapper.translate_key("") is None
    assert mapper.translate_key("   ") is None


def test_rebinding_changes_behavior():
    mapper = InputMapper.default()
    mapper.bind("A", InputAction.NEW_DUNGEON)
    assert mapper.translate_key("A") == InputAction.NEW_DUNGEON

    mapper.unbind("A")
    assert mapper.translate_key("A") is None


def test_alias_registration_for_numeric_keys():
    mapper = InputMapper.default()
    # Backends such as Arcade use integer key codes
    mapper.set_alias(65362, "UP")
    assert mapper.translate_key(65362) == InputAction.MOVE_UP


def test_load_bindings_from_settings():
    mapper = InputMapper.default()
    mapper.load_bindings({"move_up": ["I"], "MOVE_LEFT": ["J"], "JUMP": ["SPACE"]})
    assert mapper.translate_key("i") == InputAction.MOVE_UP
    assert mapper.translate_key("J") == InputAction.MOVE_LEFT
    # Unknown actions are skipped
    assert mapper.translate_key("SPACE") is None


def test_action_directions():
    assert ACTION_DIRECTIONS[InputAction.MOVE_UP] is Direction.UP
    assert InputAction.MOVE_RIGHT.direction is Direction.RIGHT
    assert InputAction.QUIT.direction is None
