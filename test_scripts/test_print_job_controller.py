import pytest
from PIL import Image

from image_print.controller import PlacedPage, PrintJobController
from image_print.errors import InvalidRangeError, PageRangeError, RenderFailureError
from image_print.layout import DrawRect, PrintableArea, ScalingPolicy
from image_print.page_range import PageRange


def _images(*sizes):
    return [Image.new("RGB", size) for size in sizes]


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, image, rect):
        self.calls.append((image, rect))


def _area(width=300, height=200):
    return lambda: PrintableArea(width, height)


def test_two_page_job_places_each_image():
    images = _images((100, 50), (400, 300))
    controller = PrintJobController(images)
    render = Recorder()

    pages = controller.run_job(PageRange.all_pages(), render, _area())

    assert pages == 2
    assert [image for image, _ in render.calls] == images
    assert render.calls[0][1] == DrawRect(100.0, 75.0, 100.0, 50.0)
    assert render.calls[1][1].as_tuple() == pytest.approx((0.0, 0.0, 300.0, 225.0))
    assert not controller.has_pending_page
    assert controller.current_page == 2


def test_current_page_job_uses_cursor_left_by_previous_job():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    controller.run_job(PageRange.some_pages(1, 2), Recorder(), _area())

    render = Recorder()
    assert controller.run_job(PageRange.current_page(), render, _area()) == 1
    assert render.calls[0][0] is images[1]


def test_current_page_can_be_moved_by_host():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    controller.current_page = 3

    render = Recorder()
    controller.run_job(PageRange.current_page(), render, _area())
    assert render.calls[0][0] is images[2]

    controller.current_page = 4
    with pytest.raises(InvalidRangeError):
        controller.run_job(PageRange.current_page(), render, _area())
    assert len(render.calls) == 1

    render = Recorder()
    assert controller.run_job(PageRange.all_pages(), render, _area()) == 3


def test_some_pages_renders_only_the_span():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    render = Recorder()

    assert controller.run_job(PageRange.some_pages(2, 3), render, _area()) == 2
    assert [image for image, _ in render.calls] == images[1:]


@pytest.mark.parametrize(
    "page_range",
    [PageRange.some_pages(0, 2), PageRange.some_pages(2, 4), PageRange.some_pages(3, 2)],
)
def test_invalid_range_renders_nothing(page_range):
    controller = PrintJobController(_images((10, 10), (20, 20), (30, 30)))
    render = Recorder()
    area_calls = []

    def get_area():
        area_calls.append(1)
        return PrintableArea(300, 200)

    with pytest.raises(InvalidRangeError) as excinfo:
        controller.run_job(page_range, render, get_area)

    assert isinstance(excinfo.value.__cause__, PageRangeError)
    assert excinfo.value.range_error.kind == "invalid_bounds"
    assert render.calls == []
    assert area_calls == []
    assert not controller.has_pending_page


def test_empty_sequence_renders_zero_pages():
    controller = PrintJobController([])
    render = Recorder()

    def get_area():
        raise AssertionError("area should not be requested")

    assert controller.run_job(PageRange.all_pages(), render, get_area) == 0
    assert render.calls == []


def test_render_failure_stops_job():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    rendered = []

    def render(image, rect):
        if image is images[1]:
            raise OSError("paper jam")
        rendered.append(image)

    with pytest.raises(RenderFailureError) as excinfo:
        controller.run_job(PageRange.all_pages(), render, _area())

    assert excinfo.value.page_number == 2
    assert isinstance(excinfo.value.__cause__, OSError)
    assert rendered == [images[0]]
    assert not controller.has_pending_page


def test_area_provider_failure_is_a_render_failure():
    controller = PrintJobController(_images((10, 10)))

    def get_area():
        raise RuntimeError("no printer context")

    with pytest.raises(RenderFailureError) as excinfo:
        controller.run_job(PageRange.all_pages(), Recorder(), get_area)
    assert excinfo.value.page_number == 1


def test_image_without_dimensions_is_a_render_failure():
    controller = PrintJobController([object()])
    render = Recorder()

    with pytest.raises(RenderFailureError):
        controller.run_job(PageRange.all_pages(), render, _area())
    assert render.calls == []


def test_host_driven_steps_report_more_pages():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    render = Recorder()
    area = PrintableArea(300, 200)

    state = controller.begin(PageRange.all_pages())
    assert (state.from_page, state.to_page, state.current) == (1, 3, 1)

    assert controller.render_next_page(area, render) is True
    assert controller.render_next_page(area, render) is True
    assert controller.render_next_page(area, render) is False
    assert controller.render_next_page(area, render) is False
    assert len(render.calls) == 3


def test_printable_area_is_read_per_page():
    images = _images((100, 100), (100, 100))
    controller = PrintJobController(images)
    render = Recorder()
    areas = iter([PrintableArea(300, 200), PrintableArea(50, 400)])

    controller.run_job(PageRange.all_pages(), render, lambda: next(areas))

    assert render.calls[0][1] == DrawRect(100.0, 50.0, 100.0, 100.0)
    assert render.calls[1][1] == DrawRect(0.0, 175.0, 50.0, 50.0)


def test_host_may_stop_after_any_page():
    images = _images((10, 10), (20, 20), (30, 30))
    controller = PrintJobController(images)
    controller.begin(PageRange.all_pages())
    controller.render_next_page(PrintableArea(300, 200), Recorder())
    assert controller.has_pending_page

    render = Recorder()
    assert controller.run_job(PageRange.some_pages(3, 3), render, _area()) == 1
    assert render.calls[0][0] is images[2]


def test_iter_pages_yields_placed_pages():
    images = _images((100, 50), (400, 300))
    controller = PrintJobController(images)

    pages = list(controller.iter_pages(PageRange.all_pages(), _area()))

    assert [page.page_number for page in pages] == [1, 2]
    assert pages[0] == PlacedPage(1, images[0], DrawRect(100.0, 75.0, 100.0, 50.0))
    assert pages[1].rect.width == pytest.approx(300)
    assert not controller.has_pending_page


def test_iter_pages_rejects_range_eagerly():
    controller = PrintJobController(_images((10, 10)))
    with pytest.raises(InvalidRangeError):
        controller.iter_pages(PageRange.some_pages(1, 2), _area())


def test_iter_pages_ends_when_a_new_job_begins():
    controller = PrintJobController(_images((10, 10), (20, 20), (30, 30)))
    pages = controller.iter_pages(PageRange.all_pages(), _area())
    assert next(pages).page_number == 1

    controller.begin(PageRange.current_page())
    assert list(pages) == []


def test_no_scale_policy_is_applied_to_every_page():
    controller = PrintJobController(_images((400, 300)), ScalingPolicy.NO_SCALE)
    render = Recorder()
    controller.run_job(None, render, _area())
    assert render.calls[0][1] == DrawRect(0.0, 0.0, 400.0, 300.0)


def test_state_is_a_snapshot():
    controller = PrintJobController(_images((10, 10), (20, 20)))
    snapshot = controller.state
    snapshot.current = 2
    assert controller.current_page == 1
