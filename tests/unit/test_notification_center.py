from jewepe_portal.app.ui.components.notification_center import NotificationCenter, ToastKind


def test_listeners_receive_toasts_until_unsubscribed() -> None:
    center = NotificationCenter()
    seen = []
    unsubscribe = center.subscribe(seen.append)

    center.success("Paket berhasil dihapus.")
    unsubscribe()
    center.error("Gagal menghapus paket.")

    assert [toast.message for toast in seen] == ["Paket berhasil dihapus."]
    assert [toast.kind for toast in center.history] == [ToastKind.SUCCESS, ToastKind.ERROR]


def test_history_is_bounded() -> None:
    center = NotificationCenter(max_items=2)

    for i in range(5):
        center.info(f"pesan {i}")

    assert [toast.message for toast in center.history] == ["pesan 3", "pesan 4"]
