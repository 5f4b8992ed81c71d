import logging

import pytest

from simgallery.core.errors import SceneAlreadyAcquiredError
from simgallery.core.manager import SessionState


class Probe:
    """Demonstration that records the hooks the runtime calls on it."""

    def __init__(self, surface, context, register_control, report_status, log=None, name="probe"):
        self.surface = surface
        self.ctx = context
        self.register_control = register_control
        self.report_status = report_status
        self.log = log if log is not None else []
        self.name = name
        self.updates = 0
        self.draws = 0
        self.resets = 0
        self.log.append(("construct", name))
        register_control("slider", "Speed", {"min": 0, "max": 10, "value": 5}, lambda v: None)
        report_status(f"{name} ready")

    def update(self):
        self.updates += 1

    def draw(self):
        self.draws += 1
        self.ctx.fill_circle(1, 1, 1, "red")

    def reset(self):
        self.resets += 1

    def destroy(self):
        self.log.append(("destroy", self.name))


class SceneProbe(Probe):
    def __init__(self, surface, *args, **kwargs):
        super().__init__(surface, *args, **kwargs)
        self.scene = surface.acquire_scene()


class ForgetfulSceneProbe(SceneProbe):
    """Acquires a scene but never releases it."""


class Exploding(Probe):
    def __init__(self, *args, fail_in="update", **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_in = fail_in

    def update(self):
        if self.fail_in == "update":
            raise RuntimeError("boom")
        super().update()

    def draw(self):
        if self.fail_in == "draw":
            raise RuntimeError("kaput")
        super().draw()


def register(manager, sim_id, cls=Probe, **kwargs):
    manager.register(sim_id, lambda *args: cls(*args, name=sim_id, **kwargs))


def test_unknown_id_leaves_session_idle(manager, status, frames):
    assert manager.load_sim("does-not-exist") is False
    assert manager.state is SessionState.IDLE
    assert manager.current_instance is None
    assert status.text == "Error: Simulation 'does-not-exist' not implemented yet."
    assert frames.pending_count == 0


def test_load_constructs_and_starts(manager, controls, status, frames):
    register(manager, "a")
    assert manager.load_sim("a") is True
    assert manager.state is SessionState.RUNNING
    assert manager.current_id == "a"
    assert [d.label for d in controls.descriptors] == ["Speed"]
    assert status.text == "a ready"
    assert frames.pending_count == 1


def test_each_frame_updates_once_then_draws(manager, frames, canvas):
    register(manager, "a")
    manager.load_sim("a")
    frames.run(3)
    sim = manager.current_instance
    assert (sim.updates, sim.draws) == (3, 3)
    assert canvas.context.names() == ["fill_circle"]
    assert frames.pending_count == 1


def test_previous_instance_destroyed_before_next_constructs(manager):
    log = []
    register(manager, "a", log=log)
    register(manager, "b", log=log)
    manager.load_sim("a")
    manager.load_sim("b")
    assert log == [("construct", "a"), ("destroy", "a"), ("construct", "b")]


def test_switching_clears_panels(manager, controls, status):
    register(manager, "a")
    manager.register("quiet", lambda s, c, rc, rs: type("Quiet", (), {"update": lambda self: None, "draw": lambda self: None})())
    manager.load_sim("a")
    manager.load_sim("quiet")
    assert controls.descriptors == []
    assert status.text == ""
    assert manager.controls == ()


def test_never_more_than_one_pending_frame(manager, frames):
    register(manager, "a")
    manager.load_sim("a")
    manager.start_sim()
    manager.start_sim()
    assert frames.pending_count == 1
    manager.load_sim("a")
    assert frames.pending_count == 1


def test_stop_then_tick_calls_nothing(manager, frames):
    register(manager, "a")
    manager.load_sim("a")
    sim = manager.current_instance
    manager.stop_sim()
    frames.run(5)
    assert (sim.updates, sim.draws) == (0, 0)
    assert manager.state is SessionState.STOPPED
    assert manager.pending_frame_handle is None


def test_toggle_play(manager, frames):
    register(manager, "a")
    manager.load_sim("a")
    manager.toggle_play()
    assert not manager.is_running
    manager.toggle_play()
    assert manager.is_running
    assert frames.pending_count == 1


def test_start_without_instance_is_noop(manager, frames):
    manager.start_sim()
    assert not manager.is_running
    assert frames.pending_count == 0


def test_running_changed_signal(manager):
    seen = []
    manager.running_changed.connect(seen.append)
    register(manager, "a")
    manager.load_sim("a")
    manager.stop_sim()
    manager.stop_sim()
    assert seen == [True, False]


def test_reset_while_stopped_draws_exactly_once(manager, canvas):
    register(manager, "a")
    manager.load_sim("a")
    manager.stop_sim()
    sim = manager.current_instance
    presents = canvas.presents
    manager.reset()
    assert sim.resets == 1
    assert (sim.updates, sim.draws) == (0, 1)
    assert canvas.presents == presents + 1


def test_reset_while_running_leaves_drawing_to_the_loop(manager, frames):
    register(manager, "a")
    manager.load_sim("a")
    sim = manager.current_instance
    manager.reset()
    assert sim.resets == 1
    assert sim.draws == 0
    frames.tick()
    assert (sim.updates, sim.draws) == (1, 1)


def test_reset_without_hook_still_repaints(manager):
    class NoReset:
        def __init__(self, *args):
            self.draws = 0

        def update(self):
            pass

        def draw(self):
            self.draws += 1

    manager.register("plain", NoReset)
    manager.load_sim("plain")
    manager.stop_sim()
    manager.reset()
    assert manager.current_instance.draws == 1


def test_scene_released_and_canvas_shown_before_next_construct(manager, canvas, scene_backend, surface):
    register(manager, "three", cls=ForgetfulSceneProbe)
    register(manager, "flat")
    manager.load_sim("three")
    assert surface.has_scene
    assert canvas.visible is False

    manager.load_sim("flat")
    assert not surface.has_scene
    assert canvas.visible is True
    assert scene_backend.disposed == scene_backend.created


def test_scene_can_be_acquired_again_after_switch(manager, scene_backend):
    register(manager, "three", cls=ForgetfulSceneProbe)
    manager.load_sim("three")
    manager.load_sim("three")
    assert len(scene_backend.created) == 2
    assert len(scene_backend.disposed) == 1


def test_second_scene_acquire_raises(surface):
    surface.acquire_scene()
    with pytest.raises(SceneAlreadyAcquiredError):
        surface.acquire_scene()


def test_stale_callbacks_are_ignored(manager, controls, status):
    register(manager, "a")
    register(manager, "b")
    manager.load_sim("a")
    old = manager.current_instance
    manager.load_sim("b")

    old.report_status("from the past")
    old.register_control("button", "Ghost", {}, lambda: None)
    assert status.text == "b ready"
    assert [d.label for d in controls.descriptors] == ["Speed"]


def test_duplicate_labels_are_kept_with_warning(manager, controls, caplog):
    class Twins(Probe):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self.register_control("checkbox", "Speed", {}, lambda v: None)

    register(manager, "twins", cls=Twins)
    with caplog.at_level(logging.WARNING, logger="simgallery"):
        manager.load_sim("twins")
    assert [d.label for d in controls.descriptors] == ["Speed", "Speed"]
    assert "Duplicate control label 'Speed'" in caplog.text


def test_failing_update_stops_loop_and_reports(manager, frames, status):
    failures = []
    manager.sim_failed.connect(failures.append)
    register(manager, "bad", cls=Exploding)
    manager.load_sim("bad")
    frames.run(3)
    assert manager.state is SessionState.STOPPED
    assert manager.current_instance.draws == 0
    assert status.text == "Error in 'bad' (update): boom"
    assert failures == ["bad"]
    assert frames.pending_count == 0


def test_failing_draw_stops_loop(manager, frames, status):
    register(manager, "bad", cls=Exploding, fail_in="draw")
    manager.load_sim("bad")
    frames.tick()
    assert not manager.is_running
    assert manager.current_instance.updates == 1
    assert "kaput" in status.text


def test_failing_constructor_leaves_idle_and_releases_scene(manager, surface, controls, status):
    class BrokenScene(SceneProbe):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            raise RuntimeError("no luck")

    register(manager, "broken", cls=BrokenScene)
    assert manager.load_sim("broken") is False
    assert manager.state is SessionState.IDLE
    assert not surface.has_scene
    assert controls.descriptors == []
    assert status.text == "Error: 'broken' failed to start: no luck"


def test_failures_propagate_without_isolation(make_manager, frames):
    manager = make_manager(isolate_failures=False)
    register(manager, "bad", cls=Exploding)
    manager.load_sim("bad")
    with pytest.raises(RuntimeError, match="boom"):
        frames.tick()
    assert not manager.is_running


def test_shutdown_destroys_current(manager, frames, surface):
    log = []
    register(manager, "a", cls=SceneProbe, log=log)
    manager.load_sim("a")
    manager.shutdown()
    assert log[-1] == ("destroy", "a")
    assert manager.state is SessionState.IDLE
    assert not surface.has_scene
    assert frames.pending_count == 0


def test_registry_is_exposed_to_the_host(manager):
    manager.register("a", Probe, "Alpha")
    manager.register("b", Probe)
    assert manager.registered_ids() == ["a", "b"]
    assert manager.title_for("a") == "Alpha"
    assert manager.title_for("b") == "b"
    assert manager.title_for("zzz") == "zzz"


def test_unknown_id_after_a_load_tears_down_the_previous_one(manager, controls, status, frames):
    log = []
    register(manager, "a", log=log)
    manager.load_sim("a")
    assert manager.load_sim("zzz") is False
    assert log == [("construct", "a"), ("destroy", "a")]
    assert manager.state is SessionState.IDLE
    assert manager.current_id is None
    assert status.text == "Error: Simulation 'zzz' not implemented yet."
    assert controls.descriptors == []
    assert frames.pending_count == 0


class MessyTeardown(SceneProbe):
    def destroy(self):
        super().destroy()
        raise RuntimeError("stuck")


def test_failing_destroy_still_clears_everything_without_isolation(make_manager, frames, controls, surface, canvas):
    manager = make_manager(isolate_failures=False)
    register(manager, "messy", cls=MessyTeardown)
    manager.load_sim("messy")
    with pytest.raises(RuntimeError, match="stuck"):
        manager.load_sim("messy")
    assert not manager.is_running
    assert manager.current_instance is None
    assert frames.pending_count == 0
    assert controls.descriptors == []
    assert not surface.has_scene
    assert canvas.visible is True


def test_failing_destroy_is_logged_with_isolation(manager, frames, surface, caplog):
    log = []
    register(manager, "messy", cls=MessyTeardown, log=log)
    register(manager, "a", log=log)
    manager.load_sim("messy")
    with caplog.at_level(logging.ERROR, logger="simgallery"):
        assert manager.load_sim("a") is True
    assert log == [("construct", "messy"), ("destroy", "messy"), ("construct", "a")]
    assert "failed to clean up" in caplog.text
    assert not surface.has_scene
    assert frames.pending_count == 1


def test_malformed_slider_config_loads_with_defaults(manager, controls):
    class Sloppy(Probe):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self.register_control("slider", "Mass", {"min": "", "max": None, "value": "n/a"}, lambda v: None)

    register(manager, "sloppy", cls=Sloppy)
    assert manager.load_sim("sloppy") is True
    mass = controls.descriptors[-1]
    assert mass.label == "Mass"
    assert (mass.config.min, mass.config.max, mass.config.step, mass.config.value) == (0.0, 100.0, 1.0, 0.0)
